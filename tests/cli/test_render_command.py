"""Tests for the formkit command line interface."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

from formkit.__main__ import main

PROJECT_ROOT = Path(__file__).parent.parent.parent

DOCUMENT = {
    "align": "horizontal",
    "attrs": {"action": "/signup"},
    "controls": [
        {"name": "email", "type": "email", "required": True},
        {"name": "color", "type": "radio", "options": {"r": "Red"}},
    ],
    "submit": "Sign up",
}


@pytest.fixture
def document_file(tmp_path: Path) -> Path:
    path = tmp_path / "form.json"
    path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
    return path


# =============================================================================
# render
# =============================================================================


def test_render_prints_html(document_file, capsys):
    """render writes the form markup to stdout."""
    assert main(["render", str(document_file)]) == 0
    out = capsys.readouterr().out
    assert out.startswith('<form action="/signup" class="form-horizontal"')
    assert 'aria-labelledby="color-group-label"' in out
    assert out.rstrip().endswith("</form>")


def test_render_align_override(document_file, capsys):
    """--align replaces the document's alignment."""
    assert main(["render", str(document_file), "--align", "inline"]) == 0
    assert 'class="col-auto"' in capsys.readouterr().out


def test_render_to_file(document_file, tmp_path):
    """--output writes the markup to a file."""
    output = tmp_path / "form.html"
    assert main(["render", str(document_file), "-o", str(output)]) == 0
    assert output.read_text(encoding="utf-8").startswith("<form")


def test_render_feedback_style_from_environment(document_file, capsys, monkeypatch):
    """FORMKIT_FEEDBACK_STYLE applies when the flag is absent."""
    data = dict(DOCUMENT, controls=[{"name": "email", "error": "Bad"}])
    document_file.write_text(json.dumps(data), encoding="utf-8")
    monkeypatch.setenv("FORMKIT_FEEDBACK_STYLE", "tooltip")
    assert main(["render", str(document_file)]) == 0
    assert "invalid-tooltip" in capsys.readouterr().out


def test_render_missing_file(tmp_path):
    """Unreadable documents fail with exit code 1."""
    assert main(["render", str(tmp_path / "missing.json")]) == 1


def test_render_invalid_document(tmp_path):
    """Documents failing validation fail with exit code 1."""
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"controls": [{"type": "text"}]}), encoding="utf-8")
    assert main(["render", str(path)]) == 1


def test_render_invalid_alignment(tmp_path):
    """Unknown alignments fail with exit code 1."""
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"align": "diagonal"}), encoding="utf-8")
    assert main(["render", str(path)]) == 1


# =============================================================================
# templates / env
# =============================================================================


def test_templates_json(capsys):
    """templates --json prints the effective set for an alignment."""
    assert main(["templates", "--align", "horizontal", "--json", "-n", "formGroup"]) == 0
    templates = json.loads(capsys.readouterr().out)
    assert templates == {"formGroup": '{{label}}<div class="col-md-10">{{input}}{{error}}{{help}}</div>'}


def test_templates_unknown_name():
    """Unknown template names fail with exit code 1."""
    assert main(["templates", "-n", "noSuchTemplate"]) == 1


def test_templates_invalid_default_alignment(monkeypatch):
    """An invalid FORMKIT_ALIGN fails with exit code 1 instead of a traceback."""
    monkeypatch.setenv("FORMKIT_ALIGN", "diagonal")
    assert main(["templates"]) == 1


def test_env_lists_variables(capsys, monkeypatch):
    """env prints every variable with its current value."""
    monkeypatch.setenv("FORMKIT_ERROR_CLASS", "has-error")
    assert main(["env", "-c", "form"]) == 0
    out = capsys.readouterr().out
    assert "FORMKIT_ERROR_CLASS=has-error" in out
    assert "FORMKIT_GRID_LEFT" not in out


def test_unknown_command():
    """Unknown commands print help and fail."""
    assert main(["bogus"]) == 1
    assert main([]) == 1


# =============================================================================
# Subprocess
# =============================================================================


def test_module_entry_point(document_file):
    """python -m formkit render runs end to end."""
    result = subprocess.run(
        [sys.executable, "-m", "formkit", "render", str(document_file)],
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
        timeout=60,
    )
    assert result.returncode == 0, result.stderr
    assert result.stdout.startswith("<form")


def test_module_reads_stdin():
    """A document can be piped through stdin."""
    result = subprocess.run(
        [sys.executable, "-m", "formkit", "render", "-"],
        input=json.dumps({"controls": [{"name": "q"}]}),
        capture_output=True,
        text=True,
        cwd=PROJECT_ROOT,
        timeout=60,
    )
    assert result.returncode == 0, result.stderr
    assert 'name="q"' in result.stdout
