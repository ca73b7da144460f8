"""Errors and warnings raised by the Architex core.

Every hard failure derives from :class:`ArchitexError` so the CLI can report
it with a single ``except`` clause. The core never swallows these: a raised
error aborts the current generation call and files already written stay on
disk.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class ArchitexError(Exception):
    """Base class for all Architex errors."""


class TemplateNotFoundError(ArchitexError):
    """Raised when a template reference resolves to no file in any layer."""

    def __init__(self, reference: str, attempted: Sequence[str | Path] = ()) -> None:
        self.reference = reference
        self.attempted = [str(p) for p in attempted]
        tried = ", ".join(self.attempted) if self.attempted else "no candidate paths"
        super().__init__(f"Template not found: {reference} (tried: {tried})")


class FileConflictError(ArchitexError):
    """Raised when a target file already exists and ``force`` was not given."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File already exists: {path} (use --force to overwrite)")


class GenerationError(ArchitexError):
    """Raised when a generation call produces an inconsistent file plan."""


class PatternDisabledError(ArchitexError):
    """Raised when generating for a pattern switched off in the configuration."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"Pattern '{pattern}' is disabled in the configuration")


class InvalidNameError(ArchitexError, ValueError):
    """Raised when an entity name cannot be turned into a class name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Invalid entity name: {name!r}")


class InvalidOptionError(ArchitexError, ValueError):
    """Raised when a generator option has a value it cannot honour."""


class UnresolvedPlaceholderWarning(UserWarning):
    """Emitted when placeholders survive rendering without a matching variable.

    The placeholders are left verbatim in the output so that typos in stubs
    remain visible in the generated files.
    """

    def __init__(self, keys: Sequence[str]) -> None:
        self.keys = list(keys)
        super().__init__(f"Unresolved placeholders left in output: {', '.join(self.keys)}")
