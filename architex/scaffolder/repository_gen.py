"""Repository pattern generation.

Emits, in order: the shared base repository (only when requested and not
yet present), the repository interface, the implementation and, with
``with_service``, the matching service class.
"""

from __future__ import annotations

from typing import Iterator

from architex.exceptions import InvalidOptionError

from ._base import BaseGenerator, GeneratedFile, Options, flag, join_namespace, join_path
from .naming import module_file, snake, table_name
from .service_gen import ServiceGenerator


class RepositoryGenerator(BaseGenerator):
    """Generates repository interfaces and implementations."""

    PATTERN = "repository"
    LABEL = "Repository"

    def __init__(self, *args, service: ServiceGenerator | None = None, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.service = service

    def iter_files(self, name: str, options: Options) -> Iterator[GeneratedFile]:
        entity = self.entity_name(name)
        model = self.entity_name(options.get("model") or entity)
        cfg = self.config

        interface_name = entity + cfg.interface_suffix
        class_name = entity + cfg.implementation_suffix
        interface_namespace = join_namespace(cfg.namespace, cfg.interfaces_dir)
        base_namespace = join_namespace(cfg.namespace, cfg.base_dir)

        variables = {
            "entity_name": entity,
            "model_name": model,
            "model_module": snake(model),
            "model_namespace": cfg.model_namespace,
            "table_name": table_name(model),
            "interface_name": interface_name,
            "interface_module": snake(interface_name),
            "interface_namespace": interface_namespace,
            "base_class": cfg.base_class,
            "base_module": snake(cfg.base_class),
            "base_namespace": base_namespace,
        }

        if flag(options, "with_base", cfg.generate_base):
            base_path = join_path(cfg.path, cfg.base_dir, module_file(cfg.base_class))
            if not self.exists(base_path):
                yield GeneratedFile(
                    base_path,
                    self.render(
                        "repository.base",
                        **variables,
                        namespace=base_namespace,
                        class_name=cfg.base_class,
                    ),
                )

        yield GeneratedFile(
            join_path(cfg.path, cfg.interfaces_dir, module_file(interface_name)),
            self.render(
                "repository.interface",
                **variables,
                namespace=interface_namespace,
                class_name=interface_name,
            ),
        )
        yield GeneratedFile(
            join_path(cfg.path, module_file(class_name)),
            self.render(
                "repository.implementation",
                **variables,
                namespace=cfg.namespace,
                class_name=class_name,
            ),
        )

        if flag(options, "with_service"):
            if self.service is None:
                raise InvalidOptionError("with_service requires a service generator")
            self.service.check_enabled()
            yield from self.service.iter_files(model, {"model": model})
