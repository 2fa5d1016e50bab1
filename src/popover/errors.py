"""Exceptions raised by popover."""


class PopoverError(Exception):
    """Base class for popover errors."""
    pass


class OverlayTornDownError(PopoverError, RuntimeError):
    """Raised when an overlay controller is used after ``destroy()``."""
    pass
