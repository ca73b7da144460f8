"""Shared machinery for the architecture pattern generators.

Every generator turns an entity name plus an options mapping into an ordered
stream of :class:`GeneratedFile` objects.  :class:`BaseGenerator` owns the
parts that do not depend on the pattern: variable merging, template lookup,
name validation, conflict detection and writing.  :class:`ModuleGenerator`
adds the table-driven emission used by the modular and hexagonal patterns.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, ClassVar, Iterator, Mapping, NamedTuple

from pydantic import BaseModel

from architex.exceptions import (
    FileConflictError,
    GenerationError,
    InvalidNameError,
    PatternDisabledError,
)

from .naming import format_name, is_identifier, lower, module_file, plural, snake, table_name, upper
from .resolver import TemplateResolver
from .templates import TemplateRenderer

Options = Mapping[str, Any]


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GeneratedFile:
    """A pending write: *path* is relative to the output root, POSIX style."""

    path: str
    content: str


def join_path(*parts: str) -> str:
    """Join path fragments with ``/``, skipping empty ones."""
    return "/".join(p.strip("/") for p in parts if p and p.strip("/"))


def join_namespace(*parts: str) -> str:
    """Join namespace fragments with ``.``; ``/`` inside a fragment becomes ``.``."""
    cleaned = (p.replace("/", ".").strip(".") for p in parts if p)
    return ".".join(p for p in cleaned if p)


def flag(options: Options, key: str, default: bool = False) -> bool:
    """Read a boolean option; ``None`` or absence means *default*."""
    value = options.get(key)
    return default if value is None else bool(value)


# ---------------------------------------------------------------------------
# BaseGenerator
# ---------------------------------------------------------------------------


class BaseGenerator(ABC):
    """Base class of the pattern generators.

    Subclasses implement :meth:`iter_files`, yielding files in the pattern's
    fixed emission order.  Rendering happens lazily, one file at a time, so
    :meth:`generate` writes each file before the next template is resolved.
    An error therefore leaves earlier files on disk; nothing is rolled back.
    """

    PATTERN: ClassVar[str] = ""
    LABEL: ClassVar[str] = ""

    def __init__(
        self,
        config: BaseModel,
        resolver: TemplateResolver,
        renderer: TemplateRenderer,
        *,
        root: str | Path = ".",
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver
        self.renderer = renderer
        self.root = Path(root)
        self.defaults: dict[str, Any] = dict(defaults or {})

    # -- Public API --------------------------------------------------------

    @abstractmethod
    def iter_files(self, name: str, options: Options) -> Iterator[GeneratedFile]:
        """Yield the files for *name* in emission order."""

    def plan(self, name: str, options: Options | None = None) -> list[GeneratedFile]:
        """Render every file without writing anything (dry run)."""
        self.check_enabled()
        files: list[GeneratedFile] = []
        seen: set[str] = set()
        for generated in self.iter_files(name, dict(options or {})):
            self._claim(generated.path, seen)
            files.append(generated)
        return files

    def generate(self, name: str, options: Options | None = None) -> list[str]:
        """Render and write every file for *name*.

        Args:
            name: The entity (or module) name supplied by the user.
            options: Pattern options; ``force`` allows overwriting.

        Returns:
            Relative paths of the written files, in emission order.

        Raises:
            FileConflictError: A target exists and ``force`` is not set.
            TemplateNotFoundError: A stub could not be resolved.
        """
        self.check_enabled()
        opts = dict(options or {})
        force = flag(opts, "force")
        created: list[str] = []
        seen: set[str] = set()
        for generated in self.iter_files(name, opts):
            self._claim(generated.path, seen)
            self.write(generated, force=force)
            created.append(generated.path)
        return created

    # -- Helpers for subclasses --------------------------------------------

    def check_enabled(self) -> None:
        if not getattr(self.config, "enabled", True):
            raise PatternDisabledError(self.PATTERN)

    def entity_name(self, raw_name: str) -> str:
        """Format *raw_name* and make sure it is usable as a class name."""
        formatted = format_name(raw_name)
        if not formatted or not is_identifier(formatted):
            raise InvalidNameError(raw_name)
        return formatted

    def render(self, reference: str, **variables: Any) -> str:
        """Resolve *reference* and render it with the defaults plus *variables*."""
        body = self.resolver.resolve(reference)
        return self.renderer.render(body, {**self.defaults, **variables})

    def exists(self, relative_path: str) -> bool:
        return (self.root / relative_path).exists()

    def write(self, generated: GeneratedFile, *, force: bool = False) -> Path:
        """Write *generated* under the root, creating parent directories."""
        target = self.root / generated.path
        if target.exists() and not force:
            raise FileConflictError(generated.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
        return target

    @staticmethod
    def _claim(path: str, seen: set[str]) -> None:
        if path in seen:
            raise GenerationError(f"Duplicate output path in one generation call: {path}")
        seen.add(path)


# ---------------------------------------------------------------------------
# ModuleGenerator
# ---------------------------------------------------------------------------


class Artifact(NamedTuple):
    """One row of a module structure table.

    ``class_name`` and ``file_name`` are format strings over ``module``,
    ``snake``, ``lower``, ``plural``, ``table`` and ``stamp``.  Without a
    ``file_name`` the file is named after the class.
    """

    key: str
    option: str | None
    class_name: str
    file_name: str | None = None


class ModuleGenerator(BaseGenerator):
    """Generator driven by a fixed, ordered artifact table.

    The configuration supplies ``base_path``, ``base_namespace``,
    ``structure`` (artifact key -> subdirectory) and ``default_options``.
    Options ``path`` and ``namespace`` relocate the module.
    """

    ARTIFACTS: ClassVar[tuple[Artifact, ...]] = ()

    def __init__(
        self,
        config: BaseModel,
        resolver: TemplateResolver,
        renderer: TemplateRenderer,
        *,
        root: str | Path = ".",
        defaults: Mapping[str, Any] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        super().__init__(config, resolver, renderer, root=root, defaults=defaults)
        self.clock = clock or datetime.now

    def resolve_options(self, options: Options) -> dict[str, Any]:
        """Configured defaults overlaid with every non-``None`` option."""
        merged: dict[str, Any] = dict(self.config.default_options)
        merged.update({k: v for k, v in options.items() if v is not None})
        return merged

    def iter_files(self, name: str, options: Options) -> Iterator[GeneratedFile]:
        module = self.entity_name(name)
        opts = self.resolve_options(options)
        module_path = opts.get("path") or join_path(self.config.base_path, snake(module))
        namespace = opts.get("namespace") or join_namespace(
            self.config.base_namespace, snake(module)
        )

        words = {
            "module": module,
            "snake": snake(module),
            "lower": lower(module),
            "plural": plural(module),
            "table": table_name(module),
            "stamp": self.clock().strftime("%Y_%m_%d_%H%M%S"),
        }
        variables: dict[str, Any] = {
            "module_name": module,
            "module_snake": words["snake"],
            "module_lower": words["lower"],
            "module_upper": upper(module),
            "module_plural": words["plural"],
            "table_name": words["table"],
            "module_namespace": namespace,
            "module_path": module_path,
        }
        variables.update({k: bool(v) for k, v in opts.items() if k.startswith("with_")})

        locations: dict[str, tuple[str, str, str]] = {}
        for artifact in self.ARTIFACTS:
            subdir = self.config.structure.get(artifact.key, "")
            class_name = artifact.class_name.format(**words)
            file_name = (
                artifact.file_name.format(**words)
                if artifact.file_name
                else module_file(class_name)
            )
            locations[artifact.key] = (subdir, class_name, file_name)
            variables[f"{artifact.key}_name"] = class_name
            variables[f"{artifact.key}_module"] = file_name.rsplit(".", 1)[0]
            variables[f"{artifact.key}_namespace"] = join_namespace(namespace, subdir)

        emitted: list[str] = []
        for artifact in self.ARTIFACTS:
            if artifact.option and not flag(opts, artifact.option):
                continue
            subdir, class_name, file_name = locations[artifact.key]
            path = join_path(module_path, subdir, file_name)
            content = self.render(
                f"{self.PATTERN}.{artifact.key}",
                **{
                    **variables,
                    "namespace": variables[f"{artifact.key}_namespace"],
                    "class_name": class_name,
                    "files": list(emitted),
                },
            )
            emitted.append(path)
            yield GeneratedFile(path, content)
