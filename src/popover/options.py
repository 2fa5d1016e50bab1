"""Overlay option resolution."""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Callable, Mapping

from popover.config import get_popover_config


class Placement(str, Enum):
    """Placements understood by popper-style geometry engines."""

    AUTO = "auto"
    AUTO_START = "auto-start"
    AUTO_END = "auto-end"
    TOP = "top"
    TOP_START = "top-start"
    TOP_END = "top-end"
    BOTTOM = "bottom"
    BOTTOM_START = "bottom-start"
    BOTTOM_END = "bottom-end"
    RIGHT = "right"
    RIGHT_START = "right-start"
    RIGHT_END = "right-end"
    LEFT = "left"
    LEFT_START = "left-start"
    LEFT_END = "left-end"

    def __str__(self) -> str:
        return self.value


def _noop() -> None:
    pass


@dataclass(frozen=True)
class OverlayOptions:
    """Resolved options for one overlay.

    Attributes:
        placement: Where the floating element sits relative to the reference.
            Passed through to the geometry engine unvalidated.
        distance_offset: Offset perpendicular to the reference element.
        skidding_offset: Offset along the reference element's edge.
        on_open: Called with no arguments on every open() call.
        on_close: Called with no arguments on every close() call.
    """

    placement: str = Placement.BOTTOM.value
    distance_offset: float = 0
    skidding_offset: float = 0
    on_open: Callable[[], Any] = field(default=_noop, compare=False)
    on_close: Callable[[], Any] = field(default=_noop, compare=False)

    def engine_options(self) -> dict[str, Any]:
        """Build the options record handed to the geometry engine's create()."""
        return {
            "placement": str(self.placement),
            "modifiers": [
                {"name": "preventOverflow"},
                {
                    "name": "offset",
                    "options": {
                        "offset": (self.skidding_offset, self.distance_offset)
                    },
                },
            ],
        }


_FIELD_NAMES = frozenset(f.name for f in fields(OverlayOptions))


def default_options() -> OverlayOptions:
    """Options built from the module-level defaults."""
    config = get_popover_config()
    return OverlayOptions(
        placement=config.placement,
        distance_offset=config.distance_offset,
        skidding_offset=config.skidding_offset,
    )


def resolve_options(
    options: "OverlayOptions | Mapping[str, Any] | None" = None,
    **overrides: Any,
) -> OverlayOptions:
    """Merge caller-supplied options over the defaults.

    Fields present on ``options`` win over the defaults and keyword
    ``overrides`` win over both. None values count as not supplied in both.
    Unknown mapping keys are ignored, unknown keywords raise TypeError; an
    ``OverlayOptions`` instance counts as supplying every field.
    """
    resolved = default_options()

    if isinstance(options, OverlayOptions):
        resolved = options
    elif options is not None:
        supplied = {
            k: v for k, v in options.items() if k in _FIELD_NAMES and v is not None
        }
        resolved = replace(resolved, **supplied)

    unknown = set(overrides) - _FIELD_NAMES
    if unknown:
        raise TypeError(f"Unknown overlay option(s): {', '.join(sorted(unknown))}")
    supplied = {k: v for k, v in overrides.items() if v is not None}
    if supplied:
        resolved = replace(resolved, **supplied)
    return resolved
