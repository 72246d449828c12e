"""CLI entry point for formkit.

Renders form documents to HTML and inspects the template sets and
environment configuration the renderer uses.
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from formkit.align import ALIGN_TYPES, AlignmentError, AlignmentMode
from formkit.config import (
    EnvVar,
    FormSettings,
    get_environment,
    list_environment_variables,
)
from formkit.core import get_logger, setup_logging
from formkit.form import FormBuilder, FormDocument
from formkit.templater import TemplateError
from formkit.templates import TemplateSetResolver

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


# =============================================================================
# Render Command
# =============================================================================


def _read_document(source: str) -> FormDocument:
    """Read a form document from a JSON file, or stdin for "-"."""
    text = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    return FormDocument.model_validate(json.loads(text))


def cmd_render(args: argparse.Namespace) -> int:
    """Handle the render command."""
    try:
        document = _read_document(args.document)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Could not read form document {args.document}: {e}")
        return 1

    settings = FormSettings.from_environment(
        feedback_style=args.feedback_style,
        error_class=args.error_class,
        templates_file=args.templates,
    )
    if args.align:
        document.align = args.align

    try:
        builder = FormBuilder(settings)
        markup = builder.render_document(document)
    except (AlignmentError, TemplateError) as e:
        logger.error(f"Render failed: {e}")
        return 1

    if args.output:
        args.output.write_text(markup + "\n", encoding="utf-8")
        logger.info(f"Form saved to {args.output}")
    else:
        print(markup)
    return 0


def handle_render_command(argv: list[str]) -> int:
    """Handle render-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m formkit render",
        description="Render a JSON form document to Bootstrap HTML",
    )
    parser.add_argument("document", help="Path to the form document JSON ('-' for stdin)")
    parser.add_argument("--output", "-o", type=Path, help="Write HTML to this file")
    parser.add_argument(
        "--align",
        choices=ALIGN_TYPES,
        help="Override the document's alignment",
    )
    parser.add_argument(
        "--feedback-style",
        choices=["default", "tooltip"],
        help=f"Error feedback style (env: {EnvVar.FEEDBACK_STYLE.value.name})",
    )
    parser.add_argument(
        "--error-class",
        help=f"Class for invalid inputs (env: {EnvVar.ERROR_CLASS.value.name})",
    )
    parser.add_argument(
        "--templates",
        type=Path,
        help=f"JSON template overrides (env: {EnvVar.TEMPLATES_FILE.value.name})",
    )
    args = parser.parse_args(argv)
    return cmd_render(args)


# =============================================================================
# Templates Command
# =============================================================================


def cmd_templates(args: argparse.Namespace) -> int:
    """Handle the templates command."""
    settings = FormSettings.from_environment(templates_file=args.templates)
    try:
        builder = FormBuilder(settings)
    except (AlignmentError, TemplateError) as e:
        logger.error(f"Could not build template set: {e}")
        return 1

    resolver: TemplateSetResolver = builder.resolver
    templates = resolver.effective_templates(
        args.align, settings.grid, settings.offset_grid_class
    )
    if args.name:
        missing = [name for name in args.name if name not in templates]
        if missing:
            logger.error(f"Unknown template(s): {', '.join(missing)}")
            return 1
        templates = {name: templates[name] for name in args.name}

    if args.json:
        print(json.dumps(templates, indent=2))
    else:
        width = max((len(name) for name in templates), default=0)
        for name in sorted(templates):
            print(f"{name:<{width}}  {templates[name]}")
    return 0


def handle_templates_command(argv: list[str]) -> int:
    """Handle templates-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m formkit templates",
        description="Show the effective template set for an alignment",
    )
    parser.add_argument(
        "--align",
        choices=ALIGN_TYPES,
        default=AlignmentMode.DEFAULT.value,
        help="Alignment whose overlay is applied (default: default)",
    )
    parser.add_argument("--name", "-n", action="append", help="Only show this template (repeatable)")
    parser.add_argument("--json", action="store_true", help="Print as a JSON object")
    parser.add_argument("--templates", type=Path, help="JSON template overrides to apply")
    args = parser.parse_args(argv)
    return cmd_templates(args)


# =============================================================================
# Env Command
# =============================================================================


def cmd_env(args: argparse.Namespace) -> int:
    """Handle the env command."""
    variables = list_environment_variables(args.category)
    if not variables:
        logger.error(f"No variables in category: {args.category}")
        return 1

    for var in variables:
        config = var.value
        value = get_environment(var)
        print(f"{config.name}={'' if value is None else value}")
        if args.verbose:
            print(f"    {config.description} [{config.category}, default: {config.default}]")
    return 0


def handle_env_command(argv: list[str]) -> int:
    """Handle env-specific arguments."""
    parser = argparse.ArgumentParser(
        prog="python -m formkit env",
        description="Show formkit environment configuration",
    )
    parser.add_argument(
        "--category",
        "-c",
        choices=sorted({var.value.category for var in EnvVar}),
        help="Only show one category",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Show descriptions")
    args = parser.parse_args(argv)
    return cmd_env(args)


# =============================================================================
# Main
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python -m formkit {command} [args]")
    print("\nCommands:")
    print("  render     Render a JSON form document to HTML")
    print("  templates  Show the effective template set for an alignment")
    print("  env        Show environment configuration")
    print("\nExamples:")
    print("  python -m formkit render form.json")
    print("  python -m formkit render form.json --align horizontal -o form.html")
    print("  python -m formkit templates --align inline -n checkboxInlineContainer")
    print("  python -m formkit env -v")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        show_help()
        return 1

    command, rest_args = argv[0], argv[1:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "render": lambda: handle_render_command(rest_args),
        "templates": lambda: handle_templates_command(rest_args),
        "env": lambda: handle_env_command(rest_args),
    }

    if command in commands:
        setup_logging(get_environment(EnvVar.LOG_LEVEL))
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
