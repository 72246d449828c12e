"""Form builder: the public entry point for rendering Bootstrap forms.

A FormBuilder owns one alignment context and one layered templater. A form
is opened with `create()`, filled with `control()`, `submit()` and
`button()` calls, and closed with `end()`. The `form()` context manager
guarantees the close.

Example:
    >>> builder = FormBuilder()
    >>> with builder.form(align="horizontal") as form:
    ...     form.control("email", type="email")
    ...     form.submit("Save")
    >>> form.html.startswith('<form class="form-horizontal"')
    True
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from formkit.align import AlignmentContext, AlignmentMode, AlignmentState, AlignmentStateError, form_classes
from formkit.classes import apply_button_classes
from formkit.config import FormSettings
from formkit.container import compose_container
from formkit.core.log import get_logger
from formkit.fields import ControlContext, FieldDescriptor, dom_id, input_name, resolve_control
from formkit.render import ControlRenderer
from formkit.templater import StringTemplater, escape_html
from formkit.templates import BASE_TEMPLATES, TemplateSetResolver

from .models import FormDocument

logger = get_logger("form")

DEFAULT_SUBMIT_CAPTION = "Submit"


def _html_attributes(options: Mapping[str, Any]) -> dict[str, Any]:
    """Map keyword names to attribute names (`class_` -> `class`, `_` -> `-`)."""
    attrs: dict[str, Any] = {}
    for key, value in options.items():
        if key == "class_":
            key = "class"
        attrs[key.replace("_", "-")] = value
    return attrs


class FormBuilder:
    """Renders forms whose controls follow the form's alignment.

    Attributes:
        settings: Form-level defaults.
        resolver: Template layers of this builder.
        context: Alignment of the currently open form.
        renderer: Control markup renderer sharing the resolver's templater.
    """

    def __init__(
        self,
        settings: FormSettings | None = None,
        templater: StringTemplater | None = None,
    ):
        """Create a builder.

        Args:
            settings: Form-level defaults. Library defaults when omitted;
                see `from_environment()` for environment-driven settings.
            templater: Templater to render with. A new one holding
                BASE_TEMPLATES is created when omitted.
        """
        self.settings = settings or FormSettings()
        if templater is None:
            templater = StringTemplater(BASE_TEMPLATES)
            if self.settings.templates_file:
                templater.load(self.settings.templates_file)

        self.resolver = TemplateSetResolver(templater, self.settings.template_set)
        self.context = AlignmentContext(self.settings.align, self.settings.grid)
        self.renderer = ControlRenderer(templater, self.settings.error_class)

    @classmethod
    def from_environment(cls, **overrides: Any) -> "FormBuilder":
        """Builder configured from FORMKIT_* environment variables."""
        return cls(FormSettings.from_environment(**overrides))

    @property
    def templater(self) -> StringTemplater:
        return self.resolver.templater

    def _state(self, operation: str) -> AlignmentState:
        if not self.context.is_open:
            raise AlignmentStateError(f"{operation}() called outside of an open form")
        return self.context.state()

    def _post_process(self, markup: str, state: AlignmentState) -> str:
        if state.mode is AlignmentMode.INLINE:
            return self.templater.format("elementWrapper", {"content": markup})
        return markup

    # =========================================================================
    # Form lifecycle
    # =========================================================================

    def create(
        self,
        align: AlignmentMode | str | Mapping[str, Any] | None = None,
        grid: Mapping[str, Any] | None = None,
        templates: Mapping[str, str] | str | Path | None = None,
        **attrs: Any,
    ) -> str:
        """Open a form and return its start tag.

        Args:
            align: Alignment (`default`, `horizontal`, `inline`) or a grid
                table, which forces horizontal alignment. None detects the
                alignment from the form's classes.
            grid: Explicit grid table; forces horizontal alignment.
            templates: Form-level templates (mapping or JSON file path).
            **attrs: Form element attributes (`class_` for `class`).

        Returns:
            The rendered `<form ...>` tag.

        Raises:
            AlignmentError: If the alignment is invalid.
            AlignmentStateError: If a form is already open.
        """
        attrs = _html_attributes(attrs)
        mode = self.context.open(align, grid, attrs.get("class"))
        try:
            self.resolver.install(self.context.state(), templates, self.settings.offset_grid_class)
        except Exception:
            self.context.close()
            raise

        attrs = form_classes(mode, attrs)
        attrs.setdefault("method", "post")
        attrs.setdefault("accept-charset", "utf-8")
        attrs.setdefault("role", "form")

        logger.info(f"Opened {mode.value} form")
        return self.templater.format("formStart", {"attrs": self.templater.format_attributes(attrs)})

    def end(self) -> str:
        """Close the open form and return its end tag.

        Alignment and form templates are always reset, even if rendering
        the end tag fails.
        """
        try:
            return self.templater.format("formEnd")
        finally:
            try:
                self.resolver.uninstall()
            finally:
                self.context.close()

    @contextmanager
    def form(
        self,
        align: AlignmentMode | str | Mapping[str, Any] | None = None,
        grid: Mapping[str, Any] | None = None,
        templates: Mapping[str, str] | str | Path | None = None,
        **attrs: Any,
    ) -> Iterator["FormSession"]:
        """Open a form for the duration of a block.

        The yielded session collects markup; `end()` runs on any exit.
        """
        session = FormSession(self)
        session.parts.append(self.create(align, grid, templates, **attrs))
        try:
            yield session
        finally:
            session.parts.append(self.end())

    # =========================================================================
    # Elements
    # =========================================================================

    def control(self, name: str, **options: Any) -> str:
        """Render a control with its label, help, error and container.

        Args:
            name: Dot path of the field.
            **options: Field options; see FieldDescriptor. Unknown options
                become input attributes (`class_` for `class`).

        Returns:
            The control markup.

        Raises:
            AlignmentStateError: If no form is open.
        """
        return self.render_control(FieldDescriptor.from_options(name, options))

    def render_control(self, descriptor: FieldDescriptor) -> str:
        """Render a control from a prepared descriptor; see `control()`."""
        state = self._state("control")
        ctx = ControlContext(state, self.templater, self.settings)

        with self.resolver.scoped(descriptor.templates):
            resolved = resolve_control(descriptor, ctx)
            with self.resolver.scoped(resolved.templates):
                markup = self.renderer.render(resolved)
                return self._post_process(markup, state)

    def submit(self, caption: str | None = None, **options: Any) -> str:
        """Render a submit button in its container.

        The button defaults to the `primary` style. In horizontal forms the
        container offsets the button under the inputs.
        """
        state = self._state("submit")
        attrs = _html_attributes(options)
        attrs.setdefault("class", "primary")
        attrs = apply_button_classes(attrs)

        container_vars = compose_container(
            attrs.pop("container", None),
            typed="type" in attrs,
            alignment=state.mode,
            format_attributes=self.templater.format_attributes,
        )
        input_type = attrs.pop("type", "submit")
        attrs["value"] = caption if caption is not None else DEFAULT_SUBMIT_CAPTION

        button = self.templater.format(
            "inputSubmit", {"type": input_type, "attrs": self.templater.format_attributes(attrs)}
        )
        markup = self.templater.format(
            "submitContainer", {"content": button, "templateVars": container_vars}
        )
        return self._post_process(markup, state)

    def button(self, title: str, escape: bool = True, **options: Any) -> str:
        """Render a `<button>`; the type defaults to `submit`."""
        state = self._state("button")
        attrs = _html_attributes(options)
        attrs.setdefault("type", "submit")
        text = escape_html(title) if escape else title
        markup = self.templater.format(
            "button", {"text": text, "attrs": self.templater.format_attributes(attrs)}
        )
        return self._post_process(markup, state)

    def static_control(
        self,
        name: str,
        value: Any = None,
        hidden_field: bool = True,
        escape: bool = True,
        **attrs: Any,
    ) -> str:
        """Render plain text in place of an input.

        Args:
            name: Dot path of the field.
            value: Text to show.
            hidden_field: Also submit the value through a hidden input.
            escape: HTML-escape the value.
            **attrs: Attributes of the hidden input.
        """
        self._state("static_control")
        text = "" if value is None else str(value)
        content = escape_html(text) if escape else text
        markup = self.templater.format("staticControl", {"content": content})
        if not hidden_field:
            return markup

        hidden_attrs = _html_attributes(attrs)
        hidden_attrs.setdefault("id", dom_id(name))
        return markup + self.templater.format(
            "hidden",
            {
                "name": input_name(name),
                "value": escape_html(text),
                "attrs": self.templater.format_attributes(hidden_attrs),
            },
        )

    # =========================================================================
    # Documents
    # =========================================================================

    def render_document(self, document: FormDocument) -> str:
        """Render a whole form document, closing the form on any failure."""
        with self.form(document.align, document.grid, document.templates, **document.attrs) as form:
            for descriptor in document.controls:
                form.render_control(descriptor)
            if document.submit is not None:
                form.submit(document.submit.caption, **document.submit.options)
        logger.info(f"Rendered form with {len(document.controls)} controls")
        return form.html


class FormSession:
    """Markup collected while a form is open; see `FormBuilder.form()`."""

    def __init__(self, builder: FormBuilder):
        self.builder = builder
        self.parts: list[str] = []

    @property
    def html(self) -> str:
        return "".join(self.parts)

    def _add(self, markup: str) -> str:
        self.parts.append(markup)
        return markup

    def control(self, name: str, **options: Any) -> str:
        return self._add(self.builder.control(name, **options))

    def render_control(self, descriptor: FieldDescriptor) -> str:
        return self._add(self.builder.render_control(descriptor))

    def submit(self, caption: str | None = None, **options: Any) -> str:
        return self._add(self.builder.submit(caption, **options))

    def button(self, title: str, **options: Any) -> str:
        return self._add(self.builder.button(title, **options))

    def static_control(self, name: str, value: Any = None, **options: Any) -> str:
        return self._add(self.builder.static_control(name, value, **options))


__all__ = ["DEFAULT_SUBMIT_CAPTION", "FormBuilder", "FormSession"]
