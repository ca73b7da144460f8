"""Name formatting helpers shared by every pattern generator.

All functions here are pure: the same input always yields the same output and
nothing outside the arguments is consulted.  Generators derive every class
name, module name, table name and route segment through these helpers so a
single entity name maps deterministically onto a whole file tree.

Examples::

    format_name("user", "Repository")      -> "UserRepository"
    format_name("user_management")         -> "UserManagement"
    snake("UserRepositoryInterface")       -> "user_repository_interface"
    table_name("UserProfile")              -> "user_profiles"
    pluralize_lower("Category")            -> "categories"
"""

from __future__ import annotations

import re

_DELIMITERS = re.compile(r"[^A-Za-z0-9]+")
_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_LAST_WORD = re.compile(r"([A-Z]?[a-z0-9]+|[A-Z]+)$")

_UNCOUNTABLE: frozenset[str] = frozenset({
    "data",
    "deer",
    "equipment",
    "feedback",
    "fish",
    "information",
    "metadata",
    "money",
    "news",
    "series",
    "sheep",
    "software",
    "species",
    "staff",
})

_IRREGULAR: dict[str, str] = {
    "child": "children",
    "foot": "feet",
    "goose": "geese",
    "knife": "knives",
    "leaf": "leaves",
    "life": "lives",
    "man": "men",
    "mouse": "mice",
    "ox": "oxen",
    "person": "people",
    "tooth": "teeth",
    "wife": "wives",
    "woman": "women",
}

# Words ending in -f or -fe that just take -s.
_F_EXCEPTIONS: frozenset[str] = frozenset({
    "belief",
    "brief",
    "cafe",
    "chef",
    "chief",
    "proof",
    "reef",
    "roof",
    "safe",
})


# ---------------------------------------------------------------------------
# Identifier formatting
# ---------------------------------------------------------------------------


def format_name(raw_name: str, suffix: str = "") -> str:
    """Format *raw_name* as a capitalised-words identifier and append *suffix*.

    Every run of non-alphanumeric characters is a word boundary.  Only the
    first character of each word is upper-cased, so input that is already in
    canonical form (``"UserManagement"``) comes back unchanged.

    The suffix is appended verbatim and never de-duplicated:
    ``format_name("UserRepository", "Repository")`` is
    ``"UserRepositoryRepository"``.  An empty *raw_name* yields the suffix
    alone (or ``""`` without a suffix).
    """
    words = [w for w in _DELIMITERS.split(raw_name or "") if w]
    formatted = "".join(w[:1].upper() + w[1:] for w in words)
    return formatted + (suffix or "")


def studly(raw_name: str) -> str:
    """Return *raw_name* in capitalised-words form without a suffix."""
    return format_name(raw_name)


def lower(name: str) -> str:
    """Lower-case variant of the formatted name (``UserProfile`` -> ``userprofile``)."""
    return studly(name).lower()


def upper(name: str) -> str:
    """Upper-case variant of the formatted name (``UserProfile`` -> ``USERPROFILE``)."""
    return studly(name).upper()


def snake(name: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", name)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[^A-Za-z0-9]+", "_", s2).strip("_").lower()


def is_identifier(name: str) -> bool:
    """Return ``True`` if *name* can be used as a class name."""
    return bool(_IDENTIFIER.match(name))


# ---------------------------------------------------------------------------
# Pluralisation
# ---------------------------------------------------------------------------


def _plural_word(word: str) -> str:
    lowered = word.lower()
    if lowered in _UNCOUNTABLE:
        return word
    if lowered in _IRREGULAR:
        replacement = _IRREGULAR[lowered]
        return replacement.capitalize() if word[:1].isupper() else replacement
    if word.isupper() and len(word) > 1:
        return word + "s"
    if lowered not in _F_EXCEPTIONS:
        if lowered.endswith("fe") and not lowered.endswith("ffe"):
            return word[:-2] + "ves"
        if lowered.endswith("f") and not lowered.endswith("ff"):
            return word[:-1] + "ves"
    if lowered.endswith("y") and len(lowered) > 1 and lowered[-2] not in "aeiou":
        return word[:-1] + "ies"
    if lowered.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    return word + "s"


def plural(name: str) -> str:
    """Pluralise the last word of a capitalised-words name.

    ``plural("UserProfile")`` -> ``"UserProfiles"``,
    ``plural("Category")`` -> ``"Categories"``,
    ``plural("Person")`` -> ``"People"``.
    """
    formatted = studly(name)
    match = _LAST_WORD.search(formatted)
    if not match:
        return formatted
    head, last = formatted[: match.start()], match.group(1)
    return head + _plural_word(last)


def pluralize_lower(name: str) -> str:
    """Pluralised, lower-cased name for route segments (``Category`` -> ``categories``)."""
    return plural(name).lower()


def table_name(name: str) -> str:
    """Pluralised snake_case name for tables (``UserProfile`` -> ``user_profiles``)."""
    return snake(plural(name))


def module_file(class_name: str, extension: str = ".py") -> str:
    """File name holding *class_name* (``UserService`` -> ``user_service.py``)."""
    return snake(class_name) + extension
