"""Event bus generation: an event and the listener that handles it."""

from __future__ import annotations

from typing import Iterator

from ._base import BaseGenerator, GeneratedFile, Options, join_path
from .naming import module_file, snake


class EventGenerator(BaseGenerator):
    PATTERN = "event_bus"
    LABEL = "Event bus"

    def iter_files(self, name: str, options: Options) -> Iterator[GeneratedFile]:
        entity = self.entity_name(name)
        cfg = self.config
        event_name = entity + cfg.events.suffix
        listener_name = entity + cfg.listeners.suffix
        variables = {
            "entity_name": entity,
            "event_name": event_name,
            "event_module": snake(event_name),
            "event_namespace": cfg.events.namespace,
            "listener_name": listener_name,
        }

        yield GeneratedFile(
            join_path(cfg.events.path, module_file(event_name)),
            self.render(
                "event_bus.event",
                **variables,
                namespace=cfg.events.namespace,
                class_name=event_name,
            ),
        )
        yield GeneratedFile(
            join_path(cfg.listeners.path, module_file(listener_name)),
            self.render(
                "event_bus.listener",
                **variables,
                namespace=cfg.listeners.namespace,
                class_name=listener_name,
            ),
        )
