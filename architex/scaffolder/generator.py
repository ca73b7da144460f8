"""Architecture generation facade.

Wires an :class:`~architex.config.ArchitexConfig` to one resolver, one
renderer and a generator per architecture pattern, and exposes a
``generate_<pattern>`` method for each.

Quick usage::

    from architex.config import ArchitexConfig
    from architex.scaffolder import ArchitectureGenerator

    generator = ArchitectureGenerator(ArchitexConfig(), root="/tmp/project")
    paths = generator.generate_repository("User")
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Mapping

from architex.config import ArchitexConfig

from ._base import BaseGenerator, GeneratedFile
from .cqrs_gen import CqrsGenerator
from .ddd_gen import DddGenerator
from .event_gen import EventGenerator
from .hexagonal_gen import HexagonalGenerator
from .modular_gen import ModularGenerator
from .repository_gen import RepositoryGenerator
from .resolver import TemplateResolver
from .service_gen import ServiceGenerator
from .templates import TemplateRenderer

__all__ = ["ArchitectureGenerator", "BaseGenerator", "GeneratedFile"]


class ArchitectureGenerator:
    """Entry point for every architecture pattern.

    Args:
        config: Full configuration; each generator receives its own section.
        root: Output root that generated relative paths are written under.
        clock: Time source for migration file names (``datetime.now`` if
            omitted); inject a fixed clock for reproducible output.
    """

    def __init__(
        self,
        config: ArchitexConfig | None = None,
        root: str | Path = ".",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.config = config or ArchitexConfig()
        self.root = Path(root)

        templates = self.config.templates
        self.resolver = TemplateResolver(
            override_dir=templates.stub_path,
            default_dir=templates.default_stub_path,
        )
        self.renderer = TemplateRenderer(self.resolver.load_base_templates())

        patterns = self.config.patterns
        shared: dict[str, Any] = {"root": self.root, "defaults": templates.variables}
        self.service = ServiceGenerator(patterns.service, self.resolver, self.renderer, **shared)
        self.repository = RepositoryGenerator(
            patterns.repository, self.resolver, self.renderer, service=self.service, **shared
        )
        self.cqrs = CqrsGenerator(patterns.cqrs, self.resolver, self.renderer, **shared)
        self.event_bus = EventGenerator(patterns.event_bus, self.resolver, self.renderer, **shared)
        self.ddd = DddGenerator(patterns.ddd, self.resolver, self.renderer, **shared)
        self.modular = ModularGenerator(
            patterns.modular, self.resolver, self.renderer, clock=clock, **shared
        )
        self.hexagonal = HexagonalGenerator(
            patterns.hexagonal, self.resolver, self.renderer, clock=clock, **shared
        )

        self._generators: dict[str, BaseGenerator] = {
            "repository": self.repository,
            "service": self.service,
            "cqrs": self.cqrs,
            "event_bus": self.event_bus,
            "ddd": self.ddd,
            "modular": self.modular,
            "hexagonal": self.hexagonal,
        }

    def generator_for(self, pattern: str) -> BaseGenerator:
        """Return the generator registered for *pattern*.

        Raises:
            KeyError: If *pattern* is not a known pattern key.
        """
        return self._generators[pattern]

    # ------------------------------------------------------------------
    # Per-pattern shortcuts
    # ------------------------------------------------------------------

    def generate_repository(self, name: str, options: Mapping[str, Any] | None = None) -> list[str]:
        return self.repository.generate(name, options)

    def generate_service(self, name: str, options: Mapping[str, Any] | None = None) -> list[str]:
        return self.service.generate(name, options)

    def generate_cqrs(self, name: str, options: Mapping[str, Any] | None = None) -> list[str]:
        return self.cqrs.generate(name, options)

    def generate_event(self, name: str, options: Mapping[str, Any] | None = None) -> list[str]:
        return self.event_bus.generate(name, options)

    def generate_ddd(self, name: str, options: Mapping[str, Any] | None = None) -> list[str]:
        return self.ddd.generate(name, options)

    def generate_modular(self, name: str, options: Mapping[str, Any] | None = None) -> list[str]:
        return self.modular.generate(name, options)

    def generate_hexagonal(self, name: str, options: Mapping[str, Any] | None = None) -> list[str]:
        return self.hexagonal.generate(name, options)

    def list_templates(self) -> list[str]:
        """Sorted relative paths of every stub visible to the resolver."""
        return sorted(self.resolver.list_available())
