"""Visibility and positioning lifecycle for an anchored floating overlay."""

import itertools
from typing import Any, Callable, Mapping

from popover.engine.base import (
    AnchorPair,
    EngineOptions,
    GeometryEngine,
    PositioningHandle,
    create_instance,
)
from popover.errors import OverlayTornDownError
from popover.logging import get_logger, timed_block
from popover.options import OverlayOptions, resolve_options
from popover.scheduler import Scheduler

_controller_ids = itertools.count(1)


class OverlayController:
    """Open/close state machine for one overlay bound to one anchor pair.

    ``open()`` and ``close()`` flip the visibility flag, toggle the geometry
    engine's ``eventListeners`` modifier and fire the option callbacks
    synchronously. Each transition to open also schedules creation of a new
    positioning instance on ``scheduler``, because the floating element may
    only enter the layout tree during the next render pass.

    The deferred creation re-checks intent before committing: it only
    installs an instance if the overlay is still open, has not been torn down
    and no later open transition has been scheduled. A superseded instance is
    destroyed before the new one is installed, so at most one instance is
    ever live.

    Example:
        scheduler = ManualScheduler()
        with OverlayController(AnchorPair(button, menu), engine, scheduler) as c:
            c.open()
            scheduler.flush()  # after the host commits layout
            c.instance.update()
    """

    def __init__(
        self,
        anchors: AnchorPair | tuple[Any, Any],
        engine: "GeometryEngine | Callable[..., PositioningHandle]",
        scheduler: Scheduler,
        options: "OverlayOptions | Mapping[str, Any] | None" = None,
        **overrides: Any,
    ) -> None:
        """Initialize a controller in the closed state.

        Args:
            anchors: Reference and floating element handles. A plain
                ``(reference, floating)`` tuple is accepted.
            engine: Geometry engine (object with ``create``) or a bare factory
                with the same signature.
            scheduler: Queue that runs deferred creation after the next
                render pass.
            options: Overlay options, merged over the module defaults.
            **overrides: Individual option fields, applied last.
        """
        if not isinstance(anchors, AnchorPair):
            anchors = AnchorPair(*anchors)
        self._anchors = anchors
        self._engine = engine
        self._scheduler = scheduler
        self._options = resolve_options(options, **overrides)

        self._is_open = False
        self._instance: PositioningHandle | None = None
        self._generation = 0
        self._torn_down = False

        self._log = get_logger(__name__).bind(controller_id=next(_controller_ids))
        self._log.debug("controller_created", placement=str(self._options.placement))

    @property
    def is_open(self) -> bool:
        """Whether the overlay is logically visible."""
        return self._is_open

    @property
    def instance(self) -> PositioningHandle | None:
        """Current positioning instance, or None before the first creation."""
        return self._instance

    @property
    def options(self) -> OverlayOptions:
        return self._options

    @property
    def anchors(self) -> AnchorPair:
        return self._anchors

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    def open(self) -> None:
        """Show the overlay. Idempotent apart from re-firing ``on_open``."""
        self._check_alive()
        self._set_open(True)
        self._set_event_listeners(True)
        if self._instance is not None:
            self._instance.update()
        self._log.debug("overlay_opened")
        self._options.on_open()

    def close(self) -> None:
        """Hide the overlay, keeping the positioning instance for reuse."""
        self._check_alive()
        self._set_open(False)
        self._set_event_listeners(False)
        self._log.debug("overlay_closed")
        self._options.on_close()

    def destroy(self) -> None:
        """Tear down the controller and release the positioning instance.

        Safe to call more than once; only the first call has an effect.
        """
        if self._torn_down:
            return
        self._torn_down = True
        instance, self._instance = self._instance, None
        if instance is not None:
            instance.destroy()
        self._log.debug("controller_destroyed", had_instance=instance is not None)

    def __enter__(self) -> "OverlayController":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.destroy()

    def __repr__(self) -> str:
        state = "open" if self._is_open else "closed"
        if self._torn_down:
            state = "destroyed"
        return f"OverlayController(state={state}, placement={str(self._options.placement)!r})"

    def _check_alive(self) -> None:
        if self._torn_down:
            raise OverlayTornDownError("OverlayController has been destroyed")

    def _set_open(self, value: bool) -> None:
        """Assign the visibility flag; a closed -> open change schedules creation."""
        previous = self._is_open
        self._is_open = value
        if not value or previous:
            return
        self._generation += 1
        generation = self._generation
        self._scheduler.next_tick(lambda: self._create_instance(generation))
        self._log.debug("instance_creation_scheduled", generation=generation)

    def _set_event_listeners(self, enabled: bool) -> None:
        """Switch the engine's event-listener modifier on the current instance."""
        if self._instance is None:
            return

        def mutator(options: EngineOptions) -> EngineOptions:
            return {
                **options,
                "modifiers": [
                    *options.get("modifiers", []),
                    {"name": "eventListeners", "enabled": enabled},
                ],
            }

        self._instance.set_options(mutator)

    def _create_instance(self, generation: int) -> None:
        """Deferred step: build a positioning instance for the latest open."""
        if self._torn_down or not self._is_open or generation != self._generation:
            self._log.debug(
                "stale_creation_skipped",
                generation=generation,
                current_generation=self._generation,
                is_open=self._is_open,
            )
            return

        with timed_block(self._log, "positioning_instance_created"):
            instance = create_instance(
                self._engine, self._anchors, self._options.engine_options()
            )

        previous, self._instance = self._instance, instance
        if previous is not None:
            previous.destroy()
            self._log.debug("superseded_instance_destroyed")
