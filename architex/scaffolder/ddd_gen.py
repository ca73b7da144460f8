"""Domain-Driven Design generation.

One sample class per configured layer subdirectory, layer by layer in the
order the layers are declared in the configuration.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from architex.exceptions import InvalidOptionError

from ._base import BaseGenerator, GeneratedFile, Options, join_namespace, join_path
from .naming import format_name, module_file, snake


class DddGenerator(BaseGenerator):
    """Generates ``<Module><Subdir>`` sample classes across DDD layers."""

    PATTERN = "ddd"
    LABEL = "DDD"

    def selected_layers(self, requested: str | Sequence[str] | None) -> list[str]:
        """Layer names to emit, in configuration order.

        Args:
            requested: Layer names as a list or a comma separated string;
                ``None`` or empty selects every layer.

        Raises:
            InvalidOptionError: If a requested layer is not configured.
        """
        configured = list(self.config.layers)
        if not requested:
            return configured
        if isinstance(requested, str):
            requested = [part.strip() for part in requested.split(",") if part.strip()]
        unknown = [layer for layer in requested if layer not in self.config.layers]
        if unknown:
            raise InvalidOptionError(
                f"Unknown DDD layer(s): {', '.join(unknown)}; "
                f"configured: {', '.join(configured)}"
            )
        return [layer for layer in configured if layer in requested]

    def iter_files(self, name: str, options: Options) -> Iterator[GeneratedFile]:
        module = self.entity_name(name)
        module_snake = snake(module)

        for layer_name in self.selected_layers(options.get("layers")):
            layer = self.config.layers[layer_name]
            for subdir in layer.subdirectories:
                class_name = module + format_name(subdir)
                namespace = join_namespace(layer.namespace, module_snake, subdir)
                yield GeneratedFile(
                    join_path(layer.path, module_snake, subdir, module_file(class_name)),
                    self.render(
                        "ddd.sample",
                        namespace=namespace,
                        class_name=class_name,
                        module_name=module,
                        module_snake=module_snake,
                        layer=layer_name,
                        subdirectory=subdir,
                        **{f"layer_{layer_name}": True, f"is_{snake(subdir)}": True},
                    ),
                )
