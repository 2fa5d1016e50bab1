"""Popover - visibility and positioning lifecycle for anchored overlays."""

from popover import dates
from popover.config import (
    configure_popover,
    get_popover_config,
    reset_popover_config,
)
from popover.constants import CalendarMode
from popover.controller import OverlayController
from popover.engine import AnchorPair, ElementRef, GeometryEngine, PositioningHandle
from popover.errors import OverlayTornDownError, PopoverError
from popover.logging import configure_logging, get_logger
from popover.options import OverlayOptions, Placement, resolve_options
from popover.scheduler import AsyncioScheduler, ManualScheduler, Scheduler

__all__ = [
    # Primary API
    "OverlayController",
    "AnchorPair",
    "ElementRef",
    # Options
    "OverlayOptions",
    "Placement",
    "resolve_options",
    # Geometry engine protocols
    "GeometryEngine",
    "PositioningHandle",
    # Scheduling
    "Scheduler",
    "ManualScheduler",
    "AsyncioScheduler",
    # Errors
    "PopoverError",
    "OverlayTornDownError",
    # Config
    "configure_popover",
    "get_popover_config",
    "reset_popover_config",
    # Logging
    "configure_logging",
    "get_logger",
    # Date helpers
    "dates",
    "CalendarMode",
]
__version__ = "0.1.0"
