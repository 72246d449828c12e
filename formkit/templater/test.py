"""Unit tests for the string templater."""

import json

import pytest

from formkit.templater import (
    StringTemplater,
    TemplateError,
    TemplateStackError,
    escape_html,
    format_attributes,
    load_templates_file,
)


@pytest.fixture
def templater() -> StringTemplater:
    """Templater with a couple of simple patterns."""
    return StringTemplater(
        {
            "error": '<div class="invalid-feedback">{{content}}</div>',
            "container": '<div class="{{containerClass}}form-group">{{content}}</div>',
        }
    )


class TestFormat:
    """Tests for placeholder substitution."""

    @pytest.mark.unit
    def test_substitutes_placeholders(self, templater):
        result = templater.format("error", {"content": "Required"})
        assert result == '<div class="invalid-feedback">Required</div>'

    @pytest.mark.unit
    def test_unknown_placeholders_render_empty(self, templater):
        assert templater.format("container", {"content": "x"}) == (
            '<div class="form-group">x</div>'
        )

    @pytest.mark.unit
    def test_template_vars_are_merged(self, templater):
        result = templater.format(
            "container",
            {"content": "x", "templateVars": {"containerClass": "mb-3 "}},
        )
        assert result == '<div class="mb-3 form-group">x</div>'

    @pytest.mark.unit
    def test_explicit_data_wins_over_template_vars(self, templater):
        result = templater.format(
            "error", {"content": "a", "templateVars": {"content": "b"}}
        )
        assert ">a<" in result

    @pytest.mark.unit
    def test_sequences_are_concatenated(self, templater):
        assert templater.format("error", {"content": ["a", "b"]}).count("ab") == 1

    @pytest.mark.unit
    def test_unknown_template_raises(self, templater):
        with pytest.raises(TemplateError, match="nope"):
            templater.format("nope", {})

    @pytest.mark.unit
    def test_none_and_false_render_empty(self, templater):
        assert templater.format("error", {"content": None}) == '<div class="invalid-feedback"></div>'
        assert templater.format("error", {"content": False}) == '<div class="invalid-feedback"></div>'

    @pytest.mark.unit
    def test_values_are_not_escaped(self, templater):
        assert "<b>x</b>" in templater.format("error", {"content": "<b>x</b>"})

    @pytest.mark.unit
    def test_trailing_newline_is_kept(self):
        templater = StringTemplater({"line": "{{text}}\n"})
        assert templater.format("line", {"text": "a"}) == "a\n"

    @pytest.mark.unit
    def test_invalid_pattern_raises(self):
        templater = StringTemplater({"broken": "{{content"})
        with pytest.raises(TemplateError, match="Invalid template pattern"):
            templater.format("broken", {"content": "x"})


class TestEscapeHtml:
    """Tests for text escaping."""

    @pytest.mark.unit
    def test_escapes_markup_characters(self):
        assert escape_html("<a href=\"x\">'&'</a>") == (
            "&lt;a href=&#34;x&#34;&gt;&#39;&amp;&#39;&lt;/a&gt;"
        )

    @pytest.mark.unit
    def test_non_strings(self):
        assert escape_html(5) == "5"


class TestLayers:
    """Tests for get/add/push/pop."""

    @pytest.mark.unit
    def test_get_unknown_returns_none(self, templater):
        assert templater.get("missing") is None

    @pytest.mark.unit
    def test_push_pop_restores(self, templater):
        original = templater.get("error")
        templater.push()
        templater.add({"error": "X", "extra": "Y"})
        assert templater.get("error") == "X"
        assert templater.depth == 1
        templater.pop()
        assert templater.get("error") == original
        assert templater.get("extra") is None
        assert templater.depth == 0

    @pytest.mark.unit
    def test_pop_without_push_raises(self, templater):
        with pytest.raises(TemplateStackError):
            templater.pop()

    @pytest.mark.unit
    def test_add_ignores_none(self, templater):
        templater.add({"error": None})
        assert templater.get("error") is not None

    @pytest.mark.unit
    def test_remove(self, templater):
        templater.remove("error")
        templater.remove("error")
        assert templater.get("error") is None


class TestLoad:
    """Tests for JSON template files."""

    @pytest.mark.unit
    def test_load(self, templater, tmp_path):
        path = tmp_path / "templates.json"
        path.write_text(json.dumps({"error": "<p>{{content}}</p>"}))
        templater.load(path)
        assert templater.format("error", {"content": "x"}) == "<p>x</p>"

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(TemplateError, match="Could not read"):
            load_templates_file(tmp_path / "missing.json")

    @pytest.mark.unit
    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(TemplateError, match="Invalid JSON"):
            load_templates_file(path)

    @pytest.mark.unit
    def test_non_string_patterns(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"error": 1}))
        with pytest.raises(TemplateError, match="string patterns"):
            load_templates_file(path)


class TestFormatAttributes:
    """Tests for attribute serialization."""

    @pytest.mark.unit
    def test_empty(self):
        assert format_attributes({}) == ""
        assert format_attributes(None) == ""

    @pytest.mark.unit
    def test_escapes_values(self):
        assert format_attributes({"title": 'a "b" <c>'}) == (
            ' title="a &#34;b&#34; &lt;c&gt;"'
        )

    @pytest.mark.unit
    def test_boolean_attributes(self):
        assert format_attributes({"required": True, "disabled": False}) == (
            ' required="required"'
        )

    @pytest.mark.unit
    def test_skips_none_and_excluded(self):
        result = format_attributes(
            {"id": "a", "class": "x", "data-x": None, "templateVars": {"a": 1}},
            exclude=["class"],
        )
        assert result == ' id="a"'

    @pytest.mark.unit
    def test_sequence_values(self):
        assert format_attributes({"class": ["a", "b"]}) == ' class="a b"'
