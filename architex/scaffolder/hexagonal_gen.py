"""Hexagonal (ports and adapters) generation.

Files are emitted from the inside out: the domain entity and its ports, the
application service, then the infrastructure and UI adapters.
"""

from __future__ import annotations

from ._base import Artifact, ModuleGenerator


class HexagonalGenerator(ModuleGenerator):
    PATTERN = "hexagonal"
    LABEL = "Hexagonal"

    ARTIFACTS = (
        Artifact("entity", None, "{module}"),
        Artifact("repository_port", None, "{module}RepositoryPort"),
        Artifact("service_port", None, "{module}ServicePort"),
        Artifact("application_service", None, "{module}Service"),
        Artifact("repository_adapter", None, "{module}RepositoryAdapter"),
        Artifact("migration", "with_migrations", "Create{plural}Table", "{stamp}_create_{table}_table.py"),
        Artifact("controller_adapter", None, "{module}Controller"),
        Artifact("routes", "with_routes", "", "routes.py"),
        Artifact("test", "with_tests", "Test{module}", "test_{snake}.py"),
    )
