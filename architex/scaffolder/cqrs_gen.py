"""CQRS generation: commands, queries and their handlers."""

from __future__ import annotations

from typing import Iterator

from architex.exceptions import InvalidOptionError

from ._base import BaseGenerator, GeneratedFile, Options, join_path
from .naming import module_file, snake

_SIDES = ("command", "query")


class CqrsGenerator(BaseGenerator):
    """Generates a command, a query and one handler for each.

    The ``only`` option (``"command"`` or ``"query"``) restricts output to
    one side together with its handler.  Emission order is always command,
    query, command handler, query handler, minus whatever is filtered out.
    """

    PATTERN = "cqrs"
    LABEL = "CQRS"

    def iter_files(self, name: str, options: Options) -> Iterator[GeneratedFile]:
        entity = self.entity_name(name)
        only = options.get("only")
        if only is not None and only not in _SIDES:
            raise InvalidOptionError(f"Unknown CQRS side {only!r}; expected one of {_SIDES}")
        sides = [only] if only else list(_SIDES)

        cfg = self.config
        names = {
            "command": entity + cfg.commands.suffix,
            "query": entity + cfg.queries.suffix,
            "command_handler": entity + cfg.handlers.command_suffix,
            "query_handler": entity + cfg.handlers.query_suffix,
        }
        variables = {"entity_name": entity}
        for key, class_name in names.items():
            variables[f"{key}_name"] = class_name
            variables[f"{key}_module"] = snake(class_name)
        variables["command_namespace"] = cfg.commands.namespace
        variables["query_namespace"] = cfg.queries.namespace

        # template key -> (output dir, namespace)
        table = {
            "command": (cfg.commands.path, cfg.commands.namespace),
            "query": (cfg.queries.path, cfg.queries.namespace),
            "command_handler": (cfg.handlers.path, cfg.handlers.namespace),
            "query_handler": (cfg.handlers.path, cfg.handlers.namespace),
        }
        order = [side for side in _SIDES if side in sides]
        order += [f"{side}_handler" for side in _SIDES if side in sides]

        for key in order:
            path, namespace = table[key]
            class_name = names[key]
            yield GeneratedFile(
                join_path(path, module_file(class_name)),
                self.render(
                    f"cqrs.{key}",
                    **variables,
                    namespace=namespace,
                    class_name=class_name,
                ),
            )
