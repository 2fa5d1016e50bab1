"""Module-level defaults for overlay options."""

import threading
from dataclasses import dataclass


@dataclass
class PopoverConfig:
    """Process-wide defaults applied before caller-supplied overlay options."""

    placement: str = "bottom"
    distance_offset: float = 0
    skidding_offset: float = 0


# Module-level singleton
_popover_config: PopoverConfig | None = None
_config_lock = threading.Lock()


def get_popover_config() -> PopoverConfig:
    """Get the global popover configuration singleton."""
    global _popover_config
    if _popover_config is None:
        with _config_lock:
            if _popover_config is None:
                _popover_config = PopoverConfig()
    return _popover_config


def configure_popover(
    placement: str | None = None,
    distance_offset: float | None = None,
    skidding_offset: float | None = None,
) -> None:
    """Configure default overlay settings.

    Only the arguments that are not None are changed.

    Args:
        placement: Default placement for new overlays (e.g. "bottom-start").
        distance_offset: Default offset away from the reference element.
        skidding_offset: Default offset along the reference element's edge.

    Example:
        from popover import configure_popover

        configure_popover(placement="bottom-start", distance_offset=4)

        # Overlays built without an explicit placement now open below-left
        controller = OverlayController(anchors, engine, scheduler)
    """
    config = get_popover_config()
    with _config_lock:
        if placement is not None:
            config.placement = str(placement)
        if distance_offset is not None:
            config.distance_offset = distance_offset
        if skidding_offset is not None:
            config.skidding_offset = skidding_offset


def reset_popover_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _popover_config
    with _config_lock:
        _popover_config = PopoverConfig()
