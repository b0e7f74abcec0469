"""Input routers - map one terminal event onto the loop state."""

from __future__ import annotations

import logging
from abc import ABC
from enum import Enum, auto
from typing import TYPE_CHECKING

from globe_cli.cli.core.input import Event, Key, KeyEvent, MouseEvent, MouseKind, ResizeEvent
from globe_cli.config import ViewerConfig

if TYPE_CHECKING:
    from globe_cli.cli.studio.viewer import LoopState

logger = logging.getLogger(__name__)


class Action(Enum):
    """What the render loop should do after an event was routed."""
    CONTINUE = auto()
    EXIT = auto()


class InputRouter(ABC):
    """
    Base router shared by the interactive and screensaver modes.

    Every router exits on a character key and rebuilds the canvas on
    resize; subclasses decide what the remaining keys, the mouse and
    the idle tick do.
    """

    captures_mouse: bool = False

    def __init__(self, config: ViewerConfig | None = None) -> None:
        self.config = config or ViewerConfig()

    def route(self, state: LoopState, event: Event) -> Action:
        """Apply a single event to the state."""
        if isinstance(event, ResizeEvent):
            state.resize(event.size)
            logger.debug("Resized to %dx%d", event.size.cols, event.size.rows)
        elif isinstance(event, KeyEvent):
            if event.is_char:
                logger.debug("Exit on key %r", event.raw)
                return Action.EXIT
            self.on_key(state, event)
        elif isinstance(event, MouseEvent):
            self.on_mouse(state, event)
        return Action.CONTINUE

    def on_key(self, state: LoopState, event: KeyEvent) -> None:
        """Handle a non-character key."""

    def on_mouse(self, state: LoopState, event: MouseEvent) -> None:
        """Handle a mouse report."""

    def on_tick(self, state: LoopState) -> None:
        """Called once per frame, before rendering."""


class InteractiveRouter(InputRouter):
    """Keyboard and mouse control of zoom, tilt and rotation."""

    captures_mouse = True

    def on_key(self, state: LoopState, event: KeyEvent) -> None:
        cfg = self.config
        camera = state.camera

        if event.key == Key.PAGE_UP:
            camera.zoom_by(cfg.zoom_step)
        elif event.key == Key.PAGE_DOWN:
            camera.zoom_by(-cfg.zoom_step)
        elif event.key == Key.UP:
            camera.tilt_up(cfg.tilt_step, cfg.tilt_limit)
        elif event.key == Key.DOWN:
            camera.tilt_down(cfg.tilt_step, cfg.tilt_limit)
        elif event.key == Key.LEFT:
            camera.rotate(cfg.key_rotate_step)
        elif event.key == Key.RIGHT:
            camera.rotate(-cfg.key_rotate_step)
        elif event.key == Key.ENTER:
            cx, cy = cfg.focus_target
            camera.focus_on(cx, cy, cfg.tilt_limit)

    def on_mouse(self, state: LoopState, event: MouseEvent) -> None:
        cfg = self.config
        camera = state.camera

        if event.kind == MouseKind.DRAG:
            if state.drag is not None:
                x_last, y_last = state.drag
                dx = event.x - x_last
                dy = event.y - y_last
                if dy > 0:
                    camera.tilt_up(cfg.tilt_step, cfg.tilt_limit)
                elif dy < 0:
                    camera.tilt_down(cfg.tilt_step, cfg.tilt_limit)
                camera.rotate(dx * cfg.drag_rotate_step + dy * cfg.drag_rotate_step)
            state.drag = (event.x, event.y)
            return

        # Any other report ends the drag
        state.drag = None
        if event.kind == MouseKind.SCROLL_UP:
            camera.zoom_by(-cfg.zoom_step)
        elif event.kind == MouseKind.SCROLL_DOWN:
            camera.zoom_by(cfg.zoom_step)


class ScreensaverRouter(InputRouter):
    """Spins the globe every frame; only a character key stops it."""

    def on_tick(self, state: LoopState) -> None:
        state.camera.rotate(self.config.spin_step)
