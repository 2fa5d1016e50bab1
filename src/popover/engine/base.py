"""Protocols for the external geometry engine and the anchor pair it reads."""

from dataclasses import dataclass
from typing import Any, Callable, Protocol, runtime_checkable

EngineOptions = dict[str, Any]
OptionsMutator = Callable[[EngineOptions], EngineOptions]


@runtime_checkable
class PositioningHandle(Protocol):
    """Live positioning instance returned by a geometry engine."""

    def update(self) -> Any:
        """Recompute the floating element's position."""
        ...

    def destroy(self) -> None:
        """Release every listener and resource held by the instance."""
        ...

    def set_options(self, mutator: OptionsMutator) -> Any:
        """Replace the instance options with ``mutator(current_options)``."""
        ...


class GeometryEngine(Protocol):
    """Capability that places a floating element relative to a reference."""

    def create(
        self, reference: Any, floating: Any, options: EngineOptions
    ) -> PositioningHandle:
        """Create a positioning instance for one reference/floating pair."""
        ...


class ElementRef:
    """Explicit late-bound element handle.

    Holds either a ``value`` that the host fills in once the element is
    rendered, or a zero-argument ``getter`` called at resolution time.
    Only ElementRef instances are unwrapped; every other handle is passed
    to the engine as-is.
    """

    def __init__(
        self, value: Any = None, getter: Callable[[], Any] | None = None
    ) -> None:
        self.value = value
        self._getter = getter

    @classmethod
    def lazy(cls, getter: Callable[[], Any]) -> "ElementRef":
        """Build a ref whose element is looked up by calling ``getter``."""
        return cls(getter=getter)

    def get(self) -> Any:
        """Return the element the ref currently points at."""
        if self._getter is not None:
            return self._getter()
        return self.value

    def __repr__(self) -> str:
        if self._getter is not None:
            return f"ElementRef(getter={self._getter!r})"
        return f"ElementRef({self.value!r})"


def resolve_handle(handle: Any) -> Any:
    """Resolve an element handle to the concrete element it points at.

    ElementRef handles are unwrapped; anything else is already the element.
    """
    if isinstance(handle, ElementRef):
        return handle.get()
    return handle


@dataclass(frozen=True)
class AnchorPair:
    """Reference (trigger) and floating (overlay) element handles.

    Handles are opaque to the controller. Wrap one in an ElementRef to bind it
    late: refs are only resolved when a positioning instance is created, so
    the floating element does not need to exist yet.
    """

    reference: Any
    floating: Any

    def resolve(self) -> tuple[Any, Any]:
        """Return the concrete (reference, floating) elements."""
        return resolve_handle(self.reference), resolve_handle(self.floating)


def create_instance(
    engine: "GeometryEngine | Callable[..., PositioningHandle]",
    anchors: AnchorPair,
    options: EngineOptions,
) -> PositioningHandle:
    """Create a positioning instance from an engine object or bare factory."""
    reference, floating = anchors.resolve()
    factory = getattr(engine, "create", engine)
    return factory(reference, floating, options)
