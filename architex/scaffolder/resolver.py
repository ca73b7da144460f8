"""Layered lookup of stub templates.

Stubs are addressed either by a symbolic key registered in
:data:`TEMPLATE_REGISTRY` (``"repository.interface"``) or directly by their
path relative to a stub directory
(``"repository/interfaces/repository-interface.stub"``).  Every generator goes
through the registry so that a stub path is spelled in exactly one place.

Two layers are searched in order: the user's override directory (if
configured) and the stub directory bundled with the package.  The first
existing file wins; layers are never merged.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath
from typing import Any

from architex.exceptions import TemplateNotFoundError


# ---------------------------------------------------------------------------
# Template registry
# ---------------------------------------------------------------------------

DEFAULT_STUB_DIR = Path(__file__).parent / "stubs"

BASE_TEMPLATE_DIR = "base"

STUB_SUFFIX = ".stub"

TEMPLATE_REGISTRY: dict[str, dict[str, str]] = {
    "repository": {
        "interface": "repository/interfaces/repository-interface.stub",
        "implementation": "repository/implementations/repository-implementation.stub",
        "base": "repository/base/base-repository.stub",
    },
    "service": {
        "service": "service/service.stub",
    },
    "cqrs": {
        "command": "cqrs/commands/command.stub",
        "query": "cqrs/queries/query.stub",
        "command_handler": "cqrs/handlers/command-handler.stub",
        "query_handler": "cqrs/handlers/query-handler.stub",
    },
    "event_bus": {
        "event": "event-bus/events/event.stub",
        "listener": "event-bus/listeners/listener.stub",
    },
    "ddd": {
        "sample": "ddd/samples/ddd-sample.stub",
    },
    "modular": {
        "provider": "modular/providers/modular-service-provider.stub",
        "routes": "modular/routes/modular-routes.stub",
        "config": "modular/config/modular-config.stub",
        "controller": "modular/controllers/modular-controller.stub",
        "model": "modular/models/modular-model.stub",
        "service": "modular/services/modular-service.stub",
        "repository": "modular/repositories/modular-repository.stub",
        "migration": "modular/database/migrations/modular-migration.stub",
        "seeder": "modular/database/seeders/modular-seeder.stub",
        "test": "modular/tests/modular-test.stub",
        "readme": "modular/docs/modular-readme.stub",
    },
    "hexagonal": {
        "entity": "hexagonal/domain/entities/hexagonal-domain-entity.stub",
        "repository_port": "hexagonal/domain/ports/hexagonal-domain-repository-port.stub",
        "service_port": "hexagonal/domain/ports/hexagonal-domain-service-port.stub",
        "application_service": "hexagonal/application/services/hexagonal-application-service.stub",
        "repository_adapter": "hexagonal/infrastructure/adapters/hexagonal-infrastructure-repository-adapter.stub",
        "migration": "hexagonal/infrastructure/migrations/hexagonal-infrastructure-migration.stub",
        "controller_adapter": "hexagonal/ui/adapters/hexagonal-ui-controller-adapter.stub",
        "routes": "hexagonal/ui/routes/hexagonal-ui-routes.stub",
        "test": "hexagonal/tests/hexagonal-test.stub",
    },
}

_PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([A-Za-z_][\w.\-]*)\s*\}\}")


# ---------------------------------------------------------------------------
# TemplateResolver
# ---------------------------------------------------------------------------


class TemplateResolver:
    """Locates stub bodies in an override directory, then the bundled one.

    Resolved bodies are cached per reference string for the lifetime of the
    resolver; call :meth:`clear_cache` after changing stubs on disk.
    """

    def __init__(
        self,
        override_dir: str | Path | None = None,
        default_dir: str | Path | None = None,
        registry: dict[str, dict[str, str]] | None = None,
    ) -> None:
        self.override_dir = Path(override_dir) if override_dir else None
        self.default_dir = Path(default_dir) if default_dir else DEFAULT_STUB_DIR
        source = registry if registry is not None else TEMPLATE_REGISTRY
        self._registry: dict[str, str] = {
            f"{category}.{name}": path
            for category, entries in source.items()
            for name, path in entries.items()
        }
        self._cache: dict[str, str] = {}

    # -- Registry ----------------------------------------------------------

    def register(self, reference: str, path: str) -> None:
        """Map the symbolic *reference* to a relative stub *path*."""
        self._registry[reference] = path
        self._cache.pop(reference, None)

    def references(self) -> list[str]:
        """Return every registered symbolic key, sorted."""
        return sorted(self._registry)

    def path_for(self, reference: str) -> str:
        """Relative stub path for *reference* (the reference itself if unregistered)."""
        return self._registry.get(reference, reference)

    # -- Lookup ------------------------------------------------------------

    def layers(self) -> list[Path]:
        """Stub directories in lookup order."""
        dirs = [self.default_dir]
        if self.override_dir is not None:
            dirs.insert(0, self.override_dir)
        return dirs

    def candidates(self, reference: str) -> list[Path]:
        """Every path checked for *reference*, in lookup order."""
        relative = PurePosixPath(self.path_for(reference))
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            return []
        return [layer.joinpath(*relative.parts) for layer in self.layers()]

    def resolve(self, reference: str) -> str:
        """Return the stub body for *reference*.

        Raises:
            TemplateNotFoundError: If no layer holds the stub.
        """
        if reference in self._cache:
            return self._cache[reference]

        body = self.locate(reference).read_text(encoding="utf-8")
        self._cache[reference] = body
        return body

    def locate(self, reference: str) -> Path:
        """Return the file that lookup picks for *reference*.

        Raises:
            TemplateNotFoundError: If no layer holds the stub.
        """
        attempted = self.candidates(reference)
        for candidate in attempted:
            if candidate.is_file():
                return candidate
        raise TemplateNotFoundError(reference, attempted)

    def clear_cache(self) -> None:
        """Forget every cached body."""
        self._cache.clear()

    def list_available(self) -> set[str]:
        """Relative paths of every stub visible in either layer.

        A stub present in both layers appears once; lookup would pick the
        override copy.
        """
        available: set[str] = set()
        for layer in self.layers():
            if not layer.is_dir():
                continue
            available.update(
                p.relative_to(layer).as_posix()
                for p in layer.rglob(f"*{STUB_SUFFIX}")
                if p.is_file()
            )
        return available

    # -- Base templates ----------------------------------------------------

    def load_base_templates(self) -> dict[str, str]:
        """Load ``base/*.stub`` from both layers, keyed by file stem.

        The default layer is read first so override copies replace it.
        """
        bases: dict[str, str] = {}
        for layer in reversed(self.layers()):
            base_dir = layer / BASE_TEMPLATE_DIR
            if not base_dir.is_dir():
                continue
            for stub in sorted(base_dir.glob(f"*{STUB_SUFFIX}")):
                bases[stub.stem] = stub.read_text(encoding="utf-8")
        return bases

    # -- Introspection -----------------------------------------------------

    def extract_variables(self, reference: str) -> list[str]:
        """Sorted, unique placeholder keys used by the stub."""
        body = self.resolve(reference)
        return sorted(set(_PLACEHOLDER_PATTERN.findall(body)))

    def template_metadata(self, reference: str) -> dict[str, Any]:
        """Describe the stub that *reference* resolves to.

        ``layer`` is ``"override"`` when the override directory supplied the
        file and ``"default"`` otherwise.  ``category`` and ``name`` are only
        set for registered ``category.name`` keys.
        """
        source = self.locate(reference)
        body = source.read_text(encoding="utf-8")
        category, name = None, None
        if reference in self._registry and "." in reference:
            category, name = reference.split(".", 1)
        in_override = self.override_dir is not None and source.is_relative_to(self.override_dir)
        return {
            "reference": reference,
            "category": category,
            "name": name,
            "path": self.path_for(reference),
            "source": str(source),
            "layer": "override" if in_override else "default",
            "size": len(body.encode("utf-8")),
            "variables": sorted(set(_PLACEHOLDER_PATTERN.findall(body))),
        }

    def missing_variables(self, reference: str, variables: dict[str, object]) -> list[str]:
        """Placeholder keys of the stub that *variables* does not provide."""
        return [key for key in self.extract_variables(reference) if key not in variables]

    def create_custom_template(self, reference: str, content: str) -> Path:
        """Write *content* as the override copy of *reference*.

        Returns:
            The path written.

        Raises:
            TemplateNotFoundError: If no override directory is configured or
                the reference is not a relative path.
        """
        if self.override_dir is None:
            raise TemplateNotFoundError(reference)
        relative = PurePosixPath(self.path_for(reference))
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise TemplateNotFoundError(reference)
        target = self.override_dir.joinpath(*relative.parts)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        self.clear_cache()
        return target
