"""Tests for event bus generation (architex.scaffolder.event_gen)."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.unit


class TestEventGenerator:
    def test_event_then_listener(self, architecture):
        paths = architecture.generate_event("UserRegistered")
        assert paths == [
            "app/events/user_registered_event.py",
            "app/listeners/user_registered_listener.py",
        ]

    def test_listener_references_event(self, architecture, output_root):
        architecture.generate_event("UserRegistered")
        content = (output_root / "app/listeners/user_registered_listener.py").read_text()
        assert (
            "from app.events.user_registered_event import UserRegisteredEvent" in content
        )
        assert "def handle(self, event: UserRegisteredEvent) -> None:" in content

    def test_event_is_frozen_dataclass(self, architecture, output_root):
        architecture.generate_event("OrderShipped")
        content = (output_root / "app/events/order_shipped_event.py").read_text()
        assert "@dataclass(frozen=True)\nclass OrderShippedEvent:" in content

    def test_custom_locations(self, architecture):
        cfg = architecture.config.patterns.event_bus
        cfg.listeners.path = "app/subscribers"
        cfg.listeners.suffix = "Subscriber"
        files = architecture.event_bus.plan("UserRegistered")
        assert files[1].path == "app/subscribers/user_registered_subscriber.py"
