"""Modular architecture generation.

A module is a self-contained package under ``app/modules/<module>`` with its
own provider, controller, model, service and repository, plus optional
routes, config, migrations, seeders and tests.
"""

from __future__ import annotations

from ._base import Artifact, ModuleGenerator


class ModularGenerator(ModuleGenerator):
    PATTERN = "modular"
    LABEL = "Modular"

    ARTIFACTS = (
        Artifact("provider", None, "{module}ServiceProvider"),
        Artifact("routes", "with_routes", "", "web.py"),
        Artifact("config", "with_config", "", "{snake}.py"),
        Artifact("controller", None, "{module}Controller"),
        Artifact("model", None, "{module}"),
        Artifact("service", None, "{module}Service"),
        Artifact("repository", None, "{module}Repository"),
        Artifact("migration", "with_migrations", "Create{plural}Table", "{stamp}_create_{table}_table.py"),
        Artifact("seeder", "with_seeders", "{module}Seeder"),
        Artifact("test", "with_tests", "Test{module}", "test_{snake}.py"),
        Artifact("readme", None, "", "README.md"),
    )
