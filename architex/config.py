"""Architex configuration.

Typed configuration for every architecture pattern and for the template
layer.  All settings are Pydantic v2 models, validated at construction time
and serialisable to/from JSON.  An :class:`ArchitexConfig` is built once (by
the CLI or by the caller) and each pattern generator receives its own section
explicitly; nothing reads configuration from global state.
"""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

# Mirrors architex.scaffolder.resolver.DEFAULT_STUB_DIR without importing the scaffolder.
DEFAULT_STUB_DIR = Path(__file__).parent / "scaffolder" / "stubs"


PATTERN_KEYS: tuple[str, ...] = (
    "repository",
    "service",
    "cqrs",
    "event_bus",
    "ddd",
    "modular",
    "hexagonal",
)


# ---------------------------------------------------------------------------
# Shared building blocks
# ---------------------------------------------------------------------------


class PatternConfig(BaseModel):
    """Settings common to every architecture pattern."""

    enabled: bool = Field(default=True, description="Whether the pattern may be generated")


class ComponentConfig(BaseModel):
    """Location and naming of one kind of generated class."""

    path: str = Field(..., min_length=1, description="Output directory, relative to the root")
    namespace: str = Field(..., min_length=1, description="Dotted package path of the directory")
    suffix: str = Field(default="", description="Appended to the formatted entity name")


# ---------------------------------------------------------------------------
# Per-pattern configuration
# ---------------------------------------------------------------------------


class RepositoryConfig(PatternConfig):
    """Repository pattern: interface + implementation (+ optional base)."""

    path: str = Field(default="app/repositories", min_length=1)
    namespace: str = Field(default="app.repositories", min_length=1)
    interface_suffix: str = Field(default="RepositoryInterface")
    implementation_suffix: str = Field(default="Repository")
    interfaces_dir: str = Field(default="interfaces", min_length=1)
    base_dir: str = Field(default="base", min_length=1)
    base_class: str = Field(default="BaseRepository", min_length=1)
    model_namespace: str = Field(default="app.models", min_length=1)
    generate_base: bool = Field(
        default=False, description="Emit the shared base repository when it is missing"
    )


class ServiceConfig(PatternConfig):
    """Service layer pattern: a single service class."""

    path: str = Field(default="app/services", min_length=1)
    namespace: str = Field(default="app.services", min_length=1)
    suffix: str = Field(default="Service")
    model_namespace: str = Field(default="app.models", min_length=1)


class HandlerConfig(BaseModel):
    """Where CQRS handlers go and how they are suffixed."""

    path: str = Field(default="app/handlers", min_length=1)
    namespace: str = Field(default="app.handlers", min_length=1)
    command_suffix: str = Field(default="CommandHandler")
    query_suffix: str = Field(default="QueryHandler")


class CqrsConfig(PatternConfig):
    """CQRS pattern: command, query and one handler for each."""

    commands: ComponentConfig = Field(
        default_factory=lambda: ComponentConfig(
            path="app/commands", namespace="app.commands", suffix="Command"
        )
    )
    queries: ComponentConfig = Field(
        default_factory=lambda: ComponentConfig(
            path="app/queries", namespace="app.queries", suffix="Query"
        )
    )
    handlers: HandlerConfig = Field(default_factory=HandlerConfig)


class EventBusConfig(PatternConfig):
    """Event bus pattern: an event and the listener that reacts to it."""

    events: ComponentConfig = Field(
        default_factory=lambda: ComponentConfig(
            path="app/events", namespace="app.events", suffix="Event"
        )
    )
    listeners: ComponentConfig = Field(
        default_factory=lambda: ComponentConfig(
            path="app/listeners", namespace="app.listeners", suffix="Listener"
        )
    )


class DddLayer(BaseModel):
    """One DDD layer and the subdirectories created inside each module."""

    path: str = Field(..., min_length=1)
    namespace: str = Field(..., min_length=1)
    subdirectories: list[str] = Field(default_factory=list)


def _default_ddd_layers() -> dict[str, DddLayer]:
    return {
        "domain": DddLayer(
            path="app/domain",
            namespace="app.domain",
            subdirectories=["entities", "repositories", "services", "events", "exceptions"],
        ),
        "application": DddLayer(
            path="app/application",
            namespace="app.application",
            subdirectories=["services", "commands", "queries", "handlers"],
        ),
        "infrastructure": DddLayer(
            path="app/infrastructure",
            namespace="app.infrastructure",
            subdirectories=["repositories", "services", "persistence", "external"],
        ),
        "ui": DddLayer(
            path="app/ui",
            namespace="app.ui",
            subdirectories=["controllers", "requests", "resources", "middleware"],
        ),
    }


class DddConfig(PatternConfig):
    """Domain-Driven Design pattern; layers are emitted in declaration order."""

    layers: dict[str, DddLayer] = Field(default_factory=_default_ddd_layers)


class ModularConfig(PatternConfig):
    """Self-contained module with its own controllers, models, services, etc."""

    base_path: str = Field(default="app/modules", min_length=1)
    base_namespace: str = Field(default="app.modules", min_length=1)
    structure: dict[str, str] = Field(
        default_factory=lambda: {
            "provider": "providers",
            "routes": "routes",
            "config": "config",
            "controller": "controllers",
            "model": "models",
            "service": "services",
            "repository": "repositories",
            "migration": "database/migrations",
            "seeder": "database/seeders",
            "test": "tests",
            "readme": "",
        },
        description="Artifact key -> subdirectory inside the module",
    )
    default_options: dict[str, bool] = Field(
        default_factory=lambda: {
            "with_tests": True,
            "with_migrations": True,
            "with_seeders": True,
            "with_routes": True,
            "with_config": True,
            "with_views": False,
            "with_assets": False,
        }
    )


class HexagonalConfig(PatternConfig):
    """Ports & adapters layout for a single bounded module."""

    base_path: str = Field(default="app/hexagonal", min_length=1)
    base_namespace: str = Field(default="app.hexagonal", min_length=1)
    structure: dict[str, str] = Field(
        default_factory=lambda: {
            "entity": "domain/entities",
            "repository_port": "domain/ports",
            "service_port": "domain/ports",
            "application_service": "application/services",
            "repository_adapter": "infrastructure/adapters",
            "migration": "infrastructure/database/migrations",
            "controller_adapter": "ui/adapters",
            "routes": "ui/routes",
            "test": "tests",
        },
        description="Artifact key -> subdirectory inside the module",
    )
    default_options: dict[str, bool] = Field(
        default_factory=lambda: {
            "with_tests": True,
            "with_migrations": True,
            "with_routes": True,
        }
    )


class PatternsConfig(BaseModel):
    """All pattern sections, keyed as in the configuration file."""

    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)
    cqrs: CqrsConfig = Field(default_factory=CqrsConfig)
    event_bus: EventBusConfig = Field(default_factory=EventBusConfig)
    ddd: DddConfig = Field(default_factory=DddConfig)
    modular: ModularConfig = Field(default_factory=ModularConfig)
    hexagonal: HexagonalConfig = Field(default_factory=HexagonalConfig)


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def _default_variables() -> dict[str, Any]:
    return {
        "app_namespace": "app",
        "author": "Architex",
        "year": str(date.today().year),
    }


class TemplateConfig(BaseModel):
    """Stub lookup directories and the variables every render receives."""

    stub_path: Path | None = Field(
        default=None, description="Override directory searched before the bundled stubs"
    )
    default_stub_path: Path = Field(default=DEFAULT_STUB_DIR)
    variables: dict[str, Any] = Field(default_factory=_default_variables)


# ---------------------------------------------------------------------------
# Root configuration
# ---------------------------------------------------------------------------


class ArchitexConfig(BaseModel):
    """Global Architex configuration.

    Holds the configuration of every pattern and of the template layer.
    Instances are typically created once by the CLI entry point and then
    handed to :class:`~architex.scaffolder.generator.ArchitectureGenerator`.
    """

    patterns: PatternsConfig = Field(default_factory=PatternsConfig)
    templates: TemplateConfig = Field(default_factory=TemplateConfig)

    def pattern(self, name: str) -> PatternConfig:
        """Return the configuration section of pattern *name*.

        Raises:
            KeyError: If *name* is not a known pattern key.
        """
        if name not in PATTERN_KEYS:
            raise KeyError(name)
        return getattr(self.patterns, name)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file; parent directories are created.

        Returns:
            The path written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: str | Path) -> "ArchitexConfig":
        """Load a configuration from JSON.

        Sections missing from the file keep their defaults.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ArchitexConfig":
        """Build a configuration from environment variables.

        Recognised variables (all optional):
            ARCHITEX_CONFIG -- JSON file loaded as the starting point.
            ARCHITEX_STUB_PATH -- override stub directory.
            ARCHITEX_AUTHOR, ARCHITEX_APP_NAMESPACE -- default template variables.
        """
        config_file = os.environ.get("ARCHITEX_CONFIG")
        config = cls.load(config_file) if config_file else cls()

        if os.environ.get("ARCHITEX_STUB_PATH"):
            config.templates.stub_path = Path(os.environ["ARCHITEX_STUB_PATH"])
        if os.environ.get("ARCHITEX_AUTHOR"):
            config.templates.variables["author"] = os.environ["ARCHITEX_AUTHOR"]
        if os.environ.get("ARCHITEX_APP_NAMESPACE"):
            config.templates.variables["app_namespace"] = os.environ["ARCHITEX_APP_NAMESPACE"]
        return config
