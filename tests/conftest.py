"""Pytest configuration and shared fixtures."""

from typing import Any

import pytest

from popover.config import reset_popover_config
from popover.scheduler import ManualScheduler


class FakeHandle:
    """Positioning instance that records the calls made on it."""

    def __init__(self, reference: Any, floating: Any, options: dict) -> None:
        self.reference = reference
        self.floating = floating
        self.options = options
        self.update_calls = 0
        self.destroy_calls = 0

    def update(self) -> None:
        self.update_calls += 1

    def destroy(self) -> None:
        self.destroy_calls += 1

    def set_options(self, mutator) -> None:
        self.options = mutator(self.options)

    @property
    def listeners_enabled(self) -> bool | None:
        """Last eventListeners state applied, or None if never toggled."""
        state = None
        for modifier in self.options.get("modifiers", []):
            if modifier.get("name") == "eventListeners":
                state = modifier["enabled"]
        return state


class FakeEngine:
    """Geometry engine that hands out FakeHandles and remembers them."""

    def __init__(self) -> None:
        self.created: list[FakeHandle] = []

    def create(self, reference: Any, floating: Any, options: dict) -> FakeHandle:
        handle = FakeHandle(reference, floating, options)
        self.created.append(handle)
        return handle

    @property
    def destroy_calls(self) -> int:
        return sum(h.destroy_calls for h in self.created)


@pytest.fixture(autouse=True)
def reset_config_for_all_tests():
    """Reset the module-level option defaults around each test."""
    reset_popover_config()
    yield
    reset_popover_config()


@pytest.fixture
def engine():
    return FakeEngine()


@pytest.fixture
def scheduler():
    return ManualScheduler()
