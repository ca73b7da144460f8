"""Unit tests for the stub renderer (architex.scaffolder.templates).

Tests cover:
- Placeholder substitution, dotted keys, unresolved placeholders
- Conditionals (plain, negated, nested, whitespace handling)
- Loops (sequences, absent keys, nested blocks)
- Inheritance through extends / section / yield
- Segment parsing of malformed tags
"""

from __future__ import annotations

import warnings

import pytest

from architex.exceptions import UnresolvedPlaceholderWarning
from architex.scaffolder.templates import (
    Conditional,
    Literal,
    Loop,
    Placeholder,
    TemplateRenderer,
    create_template,
    parse,
)

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Substitution
# ---------------------------------------------------------------------------


class TestSubstitution:
    def test_simple_placeholder(self, renderer):
        assert renderer.render("Hello {{name}}!", {"name": "World"}) == "Hello World!"

    def test_whitespace_inside_braces(self, renderer):
        assert renderer.render("{{ name }}", {"name": "x"}) == "x"

    def test_dotted_key(self, renderer):
        body = "{{user.name}} <{{user.email}}>"
        result = renderer.render(body, {"user": {"name": "Ada", "email": "ada@example.com"}})
        assert result == "Ada <ada@example.com>"

    def test_none_renders_empty(self, renderer):
        assert renderer.render("[{{value}}]", {"value": None}) == "[]"

    def test_non_string_values(self, renderer):
        assert renderer.render("{{n}}/{{flag}}", {"n": 3, "flag": True}) == "3/True"

    def test_unknown_placeholder_left_verbatim(self, renderer):
        with pytest.warns(UnresolvedPlaceholderWarning) as record:
            result = renderer.render("{{undefined_key}}", {})
        assert result == "{{undefined_key}}"
        assert record[0].message.keys == ["undefined_key"]

    def test_warning_lists_each_key_once(self, renderer):
        with pytest.warns(UnresolvedPlaceholderWarning) as record:
            renderer.render("{{a}} {{b}} {{a}}", {})
        assert len(record) == 1
        assert record[0].message.keys == ["a", "b"]

    def test_no_warning_when_fully_resolved(self, renderer):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert renderer.render("{{a}}", {"a": "1"}) == "1"

    def test_render_is_repeatable(self, renderer):
        body = "{{#if on}}{{name}}{{/if}}{{#each xs}}-{{item}}{{/each}}"
        variables = {"on": True, "name": "n", "xs": ["a", "b"]}
        assert renderer.render(body, variables) == renderer.render(body, variables)

    def test_variables_not_mutated(self, renderer):
        variables = {"xs": ["a"]}
        renderer.render("{{#each xs}}{{item}}{{/each}}", variables)
        assert variables == {"xs": ["a"]}


# ---------------------------------------------------------------------------
# Conditionals
# ---------------------------------------------------------------------------


class TestConditionals:
    def test_true_keeps_block(self, renderer):
        assert renderer.render("A{{#if flag}}B{{/if}}C", {"flag": True}) == "ABC"

    def test_false_drops_block(self, renderer):
        assert renderer.render("A{{#if flag}}B{{/if}}C", {"flag": False}) == "AC"

    def test_absent_is_false(self, renderer):
        assert renderer.render("A{{#if flag}}B{{/if}}C", {}) == "AC"

    def test_negated_with_absent_flag_keeps_block(self, renderer):
        assert renderer.render("A{{#if !flag}}B{{/if}}C", {}) == "ABC"

    def test_negated_with_true_flag_drops_block(self, renderer):
        assert renderer.render("A{{#if !flag}}B{{/if}}C", {"flag": True}) == "AC"

    @pytest.mark.parametrize("value", ["", 0, [], None])
    def test_falsy_values(self, renderer, value):
        assert renderer.render("{{#if v}}x{{/if}}", {"v": value}) == ""

    def test_nested_conditionals(self, renderer):
        body = "{{#if a}}1{{#if b}}2{{/if}}3{{/if}}"
        assert renderer.render(body, {"a": True, "b": True}) == "123"
        assert renderer.render(body, {"a": True, "b": False}) == "13"
        assert renderer.render(body, {"a": False, "b": True}) == ""

    def test_block_tags_on_own_line_leave_no_blank_line(self, renderer):
        body = "first\n{{#if flag}}\nmiddle\n{{/if}}\nlast\n"
        assert renderer.render(body, {"flag": True}) == "first\nmiddle\nlast\n"
        assert renderer.render(body, {"flag": False}) == "first\nlast\n"

    def test_placeholders_inside_kept_block(self, renderer):
        assert renderer.render("{{#if on}}<{{x}}>{{/if}}", {"on": 1, "x": "y"}) == "<y>"


# ---------------------------------------------------------------------------
# Loops
# ---------------------------------------------------------------------------


class TestLoops:
    def test_each_over_list(self, renderer):
        body = "{{#each items}}[{{item}}]{{/each}}"
        assert renderer.render(body, {"items": ["x", "y"]}) == "[x][y]"

    def test_absent_sequence_renders_nothing(self, renderer):
        assert renderer.render("{{#each items}}[{{item}}]{{/each}}", {}) == ""

    def test_non_sequence_renders_nothing(self, renderer):
        assert renderer.render("{{#each items}}[{{item}}]{{/each}}", {"items": "abc"}) == ""

    def test_tuple_is_a_sequence(self, renderer):
        assert renderer.render("{{#each xs}}{{item}}{{/each}}", {"xs": ("a", "b")}) == "ab"

    def test_item_fields(self, renderer):
        body = "{{#each cols}}{{item.name}}:{{item.type}};{{/each}}"
        cols = [{"name": "id", "type": "int"}, {"name": "title", "type": "str"}]
        assert renderer.render(body, {"cols": cols}) == "id:int;title:str;"

    def test_outer_variables_visible_in_body(self, renderer):
        body = "{{#each xs}}{{prefix}}{{item}} {{/each}}"
        assert renderer.render(body, {"xs": [1, 2], "prefix": "#"}) == "#1 #2 "

    def test_conditional_inside_loop_evaluated_per_item(self, renderer):
        body = "{{#each xs}}{{#if item.on}}{{item.name}}{{/if}}{{/each}}"
        xs = [{"on": True, "name": "a"}, {"on": False, "name": "b"}, {"on": True, "name": "c"}]
        assert renderer.render(body, {"xs": xs}) == "ac"

    def test_loop_lines(self, renderer):
        body = "{{#each files}}\n- {{item}}\n{{/each}}\nend"
        assert renderer.render(body, {"files": ["a.py", "b.py"]}) == "- a.py\n- b.py\nend"


# ---------------------------------------------------------------------------
# Inheritance
# ---------------------------------------------------------------------------


class TestInheritance:
    def test_section_fills_yield(self):
        renderer = TemplateRenderer({"base": 'head-{{#yield "body"}}-tail'})
        child = '{{#extends "base"}}{{#section "body"}}MID{{/section}}'
        assert renderer.render(child) == "head-MID-tail"

    def test_child_text_outside_sections_is_discarded(self):
        renderer = TemplateRenderer({"base": '<{{#yield "a"}}>'})
        child = '{{#extends "base"}}ignored{{#section "a"}}kept{{/section}}ignored'
        assert renderer.render(child) == "<kept>"

    def test_unknown_base_returns_body_unchanged(self, renderer):
        body = '{{#extends "nope"}}x'
        assert renderer.resolve_inheritance(body) == body

    def test_unfilled_yield_left_verbatim(self):
        renderer = TemplateRenderer({"base": '{{#yield "a"}}|{{#yield "b"}}'})
        filled = renderer.resolve_inheritance('{{#extends "base"}}{{#section "a"}}A{{/section}}')
        assert filled == 'A|{{#yield "b"}}'

    def test_sections_are_rendered_with_variables(self):
        renderer = TemplateRenderer()
        renderer.register_base("page", 'T:{{#yield "title"}}')
        child = '{{#extends "page"}}{{#section "title"}}{{#if loud}}!{{/if}}{{name}}{{/section}}'
        assert renderer.render(child, {"name": "home", "loud": True}) == "T:!home"

    def test_section_opener_newline_consumed(self):
        renderer = TemplateRenderer({"base": '[{{#yield "body"}}]'})
        child = '{{#extends "base"}}\n{{#section "body"}}\nline\n{{/section}}\n'
        assert renderer.render(child) == "[line\n]"

    def test_create_template_layout(self):
        body = create_template("page", {"title": "Users", "body": "rows\n"})
        assert body == (
            '{{#extends "page"}}\n\n'
            '{{#section "title"}}\nUsers\n{{/section}}\n\n'
            '{{#section "body"}}\nrows\n{{/section}}\n\n'
        )

    def test_create_template_without_sections(self):
        assert create_template("page", {}) == '{{#extends "page"}}\n\n'

    def test_render_from_base(self):
        renderer = TemplateRenderer({"page": 'T:{{#yield "title"}}'})
        assert renderer.render_from_base("page", {"title": "{{name}}"}, {"name": "x"}) == "T:x\n"

    def test_render_from_unknown_base_keeps_sections_text(self, renderer):
        rendered = renderer.render_from_base("missing", {"a": "A"})
        assert rendered.startswith('{{#extends "missing"}}')


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


class TestParse:
    def test_segments(self):
        segments = parse("a{{x}}{{#if y}}b{{/if}}{{#each z}}c{{/each}}")
        assert segments == [
            Literal("a"),
            Placeholder("x", "{{x}}"),
            Conditional("y", False, (Literal("b"),)),
            Loop("z", (Literal("c"),)),
        ]

    def test_negated_condition(self):
        (segment,) = parse("{{#if !flag}}x{{/if}}")
        assert segment == Conditional("flag", True, (Literal("x"),))

    def test_unclosed_block_is_literal(self, renderer):
        assert renderer.render("a{{#if flag}}b", {"flag": True}) == "a{{#if flag}}b"

    def test_unclosed_block_keeps_its_newline(self, renderer):
        assert renderer.render("{{#if x}}\nabc", {"x": True}) == "{{#if x}}\nabc"
        nested = "{{#each items}}\n{{#if x}}\nabc{{/each}}"
        assert renderer.render(nested) == nested
        assert renderer.render("a\n{{#each items}}\nb") == "a\n{{#each items}}\nb"

    def test_stray_closer_is_literal(self, renderer):
        assert renderer.render("a{{/if}}b", {}) == "a{{/if}}b"

    def test_mismatched_closer_is_literal(self, renderer):
        result = renderer.render("{{#if a}}x{{/each}}y{{/if}}", {"a": True})
        assert result == "x{{/each}}y"

    def test_single_braces_untouched(self, renderer):
        assert renderer.render('{"id": {id}}', {"id": 1}) == '{"id": {id}}'
