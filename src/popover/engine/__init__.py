"""Geometry engine protocols for popover."""

from popover.engine.base import (
    AnchorPair,
    ElementRef,
    GeometryEngine,
    PositioningHandle,
    create_instance,
    resolve_handle,
)

__all__ = [
    "AnchorPair",
    "ElementRef",
    "GeometryEngine",
    "PositioningHandle",
    "create_instance",
    "resolve_handle",
]
