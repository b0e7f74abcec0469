"""Globe viewer - the render loop shared by both viewing modes."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import Optional, Protocol

from globe_cli.cli.core.input import Event, InputReader
from globe_cli.cli.core.terminal import Terminal, TerminalSize
from globe_cli.cli.studio.router import Action, InputRouter, InteractiveRouter, ScreensaverRouter
from globe_cli.config import GlyphPacking, ViewerConfig
from globe_cli.core.camera import CameraState
from globe_cli.core.canvas import Canvas, canvas_for
from globe_cli.render.globe import GlobeRenderer, build_globe

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    def read(self, timeout: float = 0.1) -> Optional[Event]:
        ...


@dataclass
class LoopState:
    """Everything the loop mutates between frames."""
    camera: CameraState
    size: TerminalSize
    packing: GlyphPacking = field(default_factory=GlyphPacking)
    canvas: Canvas = field(init=False)
    drag: Optional[tuple[int, int]] = None

    def __post_init__(self) -> None:
        self.canvas = canvas_for(self.size, self.packing)

    @classmethod
    def initial(cls, size: TerminalSize, config: ViewerConfig) -> "LoopState":
        return cls(
            camera=CameraState(zoom=config.initial_zoom),
            size=size,
            packing=config.packing,
        )

    def resize(self, size: TerminalSize) -> None:
        """Adopt a new terminal size; the old canvas is discarded."""
        self.size = size
        self.canvas = canvas_for(size, self.packing)


class GlobeViewer:
    """
    Terminal globe viewer.

    Each tick polls for at most one event, routes it, then renders a
    frame. The poll timeout paces the frames, so an idle viewer still
    redraws (and the screensaver still spins) every tick.
    """

    def __init__(
        self,
        router: InputRouter,
        globe: Optional[GlobeRenderer] = None,
        config: Optional[ViewerConfig] = None,
        events: Optional[EventSource] = None,
    ) -> None:
        self.router = router
        self.config = config or router.config
        self.globe = globe or build_globe()
        self.events = events
        self.state: Optional[LoopState] = None
        self.running = False

    def run(self) -> None:
        """Main application loop."""
        with Terminal.session(mouse=self.router.captures_mouse):
            self.state = LoopState.initial(Terminal.size(), self.config)
            if self.events is None:
                self.events = InputReader(size_provider=Terminal.size)

            logger.debug("%s started at %dx%d", type(self.router).__name__, self.state.size.cols, self.state.size.rows)
            self.running = True
            while self.running:
                self.step(self.events.read(timeout=self.config.poll_timeout))

    def step(self, event: Optional[Event]) -> bool:
        """
        Run a single tick. Returns False once the loop should stop;
        no frame is drawn on the exiting tick.
        """
        if self.state is None:
            self.state = LoopState.initial(Terminal.size(), self.config)

        if event is not None and self.router.route(self.state, event) is Action.EXIT:
            self.running = False
            return False

        self.router.on_tick(self.state)
        self._render()
        return True

    def _render(self) -> None:
        """Render the globe and stream the frame row by row."""
        state = self.state
        canvas = state.canvas

        self.globe.camera = state.camera.snapshot()
        self.globe.angle = state.camera.angle
        canvas.clear()
        self.globe.render_on(canvas)

        width, _ = canvas.get_size()
        row_width = width // canvas.packing.cols
        Terminal.write(''.join(Terminal.line(''.join(row), row_width) for row in canvas.rows()))

        if state.size.cols // 2 > state.size.rows:
            # center the frame on the x axis
            left = row_width // 2 - (row_width // 2) // 4
            Terminal.move_to(1, left + 1)
        else:
            Terminal.move_to(1, 1)


def run_viewer(interactive: bool = True, config: Optional[ViewerConfig] = None) -> None:
    """Launch the viewer in interactive or screensaver mode."""
    config = config or ViewerConfig()
    router = InteractiveRouter(config) if interactive else ScreensaverRouter(config)
    GlobeViewer(router, config=config).run()


if __name__ == "__main__":
    run_viewer(interactive="-s" not in sys.argv[1:])
