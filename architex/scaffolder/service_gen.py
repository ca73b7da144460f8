"""Service layer generation: one service class per entity."""

from __future__ import annotations

from typing import Iterator

from ._base import BaseGenerator, GeneratedFile, Options, join_path
from .naming import module_file, snake


class ServiceGenerator(BaseGenerator):
    """Generates ``<Entity>Service`` under the configured service path."""

    PATTERN = "service"
    LABEL = "Service"

    def iter_files(self, name: str, options: Options) -> Iterator[GeneratedFile]:
        entity = self.entity_name(name)
        model = self.entity_name(options.get("model") or entity)
        cfg = self.config
        class_name = entity + cfg.suffix

        yield GeneratedFile(
            join_path(cfg.path, module_file(class_name)),
            self.render(
                "service.service",
                namespace=cfg.namespace,
                class_name=class_name,
                entity_name=entity,
                model_name=model,
                model_module=snake(model),
                model_namespace=cfg.model_namespace,
            ),
        )
