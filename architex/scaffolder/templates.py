"""Stub template rendering for architecture scaffolding.

Provides the :class:`TemplateRenderer` which turns a stub body and a variable
mapping into final text.  The stub language is deliberately small:

* ``{{key}}`` / ``{{ key }}`` -- placeholder; dotted keys (``item.name``)
  traverse nested mappings.
* ``{{#if key}}...{{/if}}`` and ``{{#if !key}}...{{/if}}`` -- conditionals on
  the truthiness of a variable.
* ``{{#each key}}...{{/each}}`` -- repeats the body for every element of a
  sequence, binding the element as ``item``.
* ``{{#extends "base"}}`` with ``{{#section "name"}}...{{/section}}`` blocks --
  fills the ``{{#yield "name"}}`` slots of a registered base template.

Rendering runs four stages in a fixed order: inheritance, conditionals, loops,
substitution.  The body is parsed into a list of tagged segments once the
inheritance stage is done, so blocks may nest and malformed tags degrade to
literal text instead of raising.  Placeholders without a matching variable
are left verbatim and reported through
:class:`~architex.exceptions.UnresolvedPlaceholderWarning`.
"""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

from architex.exceptions import UnresolvedPlaceholderWarning


# ---------------------------------------------------------------------------
# Syntax
# ---------------------------------------------------------------------------

_EXTENDS_PATTERN = re.compile(r'\{\{\s*#extends\s+"([^"]+)"\s*\}\}')
_SECTION_PATTERN = re.compile(
    r'\{\{\s*#section\s+"([^"]+)"\s*\}\}\n?(.*?)\{\{\s*/section\s*\}\}', re.DOTALL
)
_YIELD_PATTERN = re.compile(r'\{\{\s*#yield\s+"([^"]+)"\s*\}\}')

_TAG_PATTERN = re.compile(
    r"\{\{\s*(?:"
    r"#(?P<open>if|each)\s+(?P<expr>[^{}]+?)"
    r"|/(?P<close>if|each)"
    r"|(?P<key>[A-Za-z_][\w.\-]*)"
    r")\s*\}\}"
)

_MISSING = object()


# ---------------------------------------------------------------------------
# Segments
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Literal:
    """Plain text copied to the output as-is."""

    text: str


@dataclass(frozen=True)
class Placeholder:
    """A ``{{key}}`` reference; ``raw`` is the original tag text."""

    key: str
    raw: str


@dataclass(frozen=True)
class Conditional:
    """An ``{{#if}}`` block."""

    key: str
    negated: bool
    body: tuple["Segment", ...]


@dataclass(frozen=True)
class Loop:
    """An ``{{#each}}`` block."""

    key: str
    body: tuple["Segment", ...]


Segment = Union[Literal, Placeholder, Conditional, Loop]


def parse(text: str) -> list[Segment]:
    """Parse *text* into a list of segments.

    A newline directly after a block tag is consumed, so block tags on their
    own line leave no blank line behind.  Parsing never fails: an opener
    without a closer, or a closer without (or not matching) its opener, is
    kept as literal text.
    """
    # Each frame: (kind, key, opener text as written, collected segments)
    root: list[Segment] = []
    stack: list[tuple[str, str, str, list[Segment]]] = []
    current = root
    pos = 0

    for match in _TAG_PATTERN.finditer(text):
        if match.start() > pos:
            current.append(Literal(text[pos : match.start()]))
        raw = match.group(0)
        end = match.end()

        if match.group("key") is not None:
            current.append(Placeholder(match.group("key"), raw))
        elif match.group("open") is not None:
            if text.startswith("\n", end):
                end += 1
            frame: list[Segment] = []
            # The consumed newline goes back with the opener if it is never closed.
            stack.append((match.group("open"), match.group("expr").strip(), text[match.start() : end], frame))
            current = frame
        else:
            kind = match.group("close")
            if stack and stack[-1][0] == kind:
                _, expr, _, body = stack.pop()
                current = stack[-1][3] if stack else root
                current.append(_make_block(kind, expr, tuple(body)))
                if text.startswith("\n", end):
                    end += 1
            else:
                current.append(Literal(raw))
        pos = end

    if pos < len(text):
        current.append(Literal(text[pos:]))

    # Unwind unclosed blocks: the opener becomes text, its body is kept.
    while stack:
        _, _, raw, body = stack.pop()
        parent = stack[-1][3] if stack else root
        parent.append(Literal(raw))
        parent.extend(body)
    return root


def create_template(base: str, sections: Mapping[str, str]) -> str:
    """Build a child template body that extends *base*.

    Each entry of *sections* becomes a ``{{#section}}`` block, in mapping
    order.  Section content always ends with a newline.

    >>> create_template("layout", {"title": "Users"})
    '{{#extends "layout"}}\\n\\n{{#section "title"}}\\nUsers\\n{{/section}}\\n\\n'
    """
    parts = [f'{{{{#extends "{base}"}}}}\n\n']
    for name, content in sections.items():
        if not content.endswith("\n"):
            content += "\n"
        parts.append(f'{{{{#section "{name}"}}}}\n{content}{{{{/section}}}}\n\n')
    return "".join(parts)


def _make_block(kind: str, expr: str, body: tuple[Segment, ...]) -> Segment:
    if kind == "if":
        negated = expr.startswith("!")
        return Conditional(expr[1:].strip() if negated else expr, negated, body)
    return Loop(expr, body)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders stub bodies against a variable mapping.

    The renderer holds the in-memory set of base templates used by
    ``{{#extends}}``; everything else is a pure function of the body and the
    variables passed to :meth:`render`.
    """

    def __init__(self, base_templates: Mapping[str, str] | None = None) -> None:
        self.base_templates: dict[str, str] = dict(base_templates or {})

    def register_base(self, name: str, body: str) -> None:
        """Make *body* available as a base template under *name*."""
        self.base_templates[name] = body

    # -- Rendering ---------------------------------------------------------

    def render(self, body: str, variables: Mapping[str, Any] | None = None) -> str:
        """Render *body* with *variables*.

        Args:
            body: Raw stub text.
            variables: Placeholder values; sequences drive ``{{#each}}``.

        Returns:
            The rendered text.  Unknown placeholders are left as written.
        """
        scope = dict(variables or {})
        content = self.resolve_inheritance(body)
        segments = parse(content)
        segments = self._evaluate_conditionals(segments, scope)
        segments = self._expand_loops(segments, scope)

        unresolved: list[str] = []
        output = self._substitute(segments, scope, unresolved)
        if unresolved:
            warnings.warn(
                UnresolvedPlaceholderWarning(list(dict.fromkeys(unresolved))),
                stacklevel=2,
            )
        return output

    def resolve_inheritance(self, body: str) -> str:
        """Return the filled base template if *body* extends a registered one.

        Sections of the child replace the matching ``{{#yield}}`` slots of the
        base and the child text is discarded.  When the base is not
        registered, *body* is returned unchanged.
        """
        match = _EXTENDS_PATTERN.search(body)
        if not match or match.group(1) not in self.base_templates:
            return body

        sections = {name: content for name, content in _SECTION_PATTERN.findall(body)}
        base = self.base_templates[match.group(1)]

        def fill(slot: re.Match[str]) -> str:
            return sections.get(slot.group(1), slot.group(0))

        return _YIELD_PATTERN.sub(fill, base)

    def render_from_base(
        self,
        base: str,
        sections: Mapping[str, str],
        variables: Mapping[str, Any] | None = None,
    ) -> str:
        """Render the registered base template *base* with *sections* filled in."""
        return self.render(create_template(base, sections), variables)

    # -- Stages ------------------------------------------------------------

    def _evaluate_conditionals(
        self, segments: Sequence[Segment], scope: Mapping[str, Any]
    ) -> list[Segment]:
        result: list[Segment] = []
        for segment in segments:
            if isinstance(segment, Conditional):
                if not self._condition_holds(segment, scope):
                    continue
                body = self._evaluate_conditionals(segment.body, scope)
                result.extend(self._bind_placeholders(body, scope))
            else:
                result.append(segment)
        return result

    def _expand_loops(
        self, segments: Sequence[Segment], scope: Mapping[str, Any]
    ) -> list[Segment]:
        result: list[Segment] = []
        for segment in segments:
            if not isinstance(segment, Loop):
                result.append(segment)
                continue
            items = _lookup(scope, segment.key)
            if not _is_sequence(items):
                continue
            for item in items:
                iteration = {**scope, "item": item}
                body = self._evaluate_conditionals(segment.body, iteration)
                body = self._expand_loops(body, iteration)
                result.extend(self._bind_placeholders(body, iteration))
        return result

    def _bind_placeholders(
        self, segments: Sequence[Segment], scope: Mapping[str, Any]
    ) -> list[Segment]:
        """Replace resolvable top-level placeholders with literals."""
        result: list[Segment] = []
        for segment in segments:
            if isinstance(segment, Placeholder):
                value = _lookup(scope, segment.key)
                if value is not _MISSING:
                    result.append(Literal(_to_text(value)))
                    continue
            result.append(segment)
        return result

    def _substitute(
        self,
        segments: Sequence[Segment],
        scope: Mapping[str, Any],
        unresolved: list[str],
    ) -> str:
        parts: list[str] = []
        for segment in segments:
            if isinstance(segment, Literal):
                parts.append(segment.text)
            elif isinstance(segment, Placeholder):
                value = _lookup(scope, segment.key)
                if value is _MISSING:
                    unresolved.append(segment.key)
                    parts.append(segment.raw)
                else:
                    parts.append(_to_text(value))
        return "".join(parts)

    @staticmethod
    def _condition_holds(segment: Conditional, scope: Mapping[str, Any]) -> bool:
        value = _lookup(scope, segment.key)
        truthy = value is not _MISSING and bool(value)
        return not truthy if segment.negated else truthy


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _lookup(scope: Mapping[str, Any], key: str) -> Any:
    """Resolve *key* in *scope*; dotted keys walk nested mappings."""
    if key in scope:
        return scope[key]
    if "." not in key:
        return _MISSING
    value: Any = scope
    for part in key.split("."):
        if isinstance(value, Mapping) and part in value:
            value = value[part]
        else:
            return _MISSING
    return value


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _to_text(value: Any) -> str:
    return "" if value is None else str(value)
