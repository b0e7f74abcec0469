"""Pytest fixtures: scripted events, a recording globe and a fake terminal."""

from contextlib import contextmanager
from typing import Iterator, Optional

import pytest

from globe_cli.cli.core.input import Event, KeyEvent
from globe_cli.cli.core.terminal import Terminal, TerminalSize
from globe_cli.core.camera import Camera
from globe_cli.core.canvas import Canvas


class ScriptedEvents:
    """Event source replaying a fixed script, then pressing 'q'."""

    def __init__(self, events: list[Optional[Event]]) -> None:
        self.events = list(events)
        self.reads = 0

    def read(self, timeout: float = 0.1) -> Optional[Event]:
        self.reads += 1
        if self.events:
            return self.events.pop(0)
        return KeyEvent(char='q', raw='q')


class RecordingGlobe:
    """Globe stand-in remembering what it was asked to draw."""

    def __init__(self, fail: bool = False) -> None:
        self.angle = 0.0
        self.camera = Camera()
        self.frames: list[tuple[float, Camera, tuple[int, int]]] = []
        self.fail = fail

    def render_on(self, canvas: Canvas) -> None:
        if self.fail:
            raise RuntimeError("renderer exploded")
        self.frames.append((self.angle, self.camera, canvas.get_size()))
        canvas.plot(0, 0, 'o')


class FakeRawMode:
    """Records raw mode transitions instead of touching the tty."""

    def __init__(self) -> None:
        self.entered = 0
        self.exited = 0

    @contextmanager
    def __call__(self) -> Iterator[None]:
        self.entered += 1
        try:
            yield
        finally:
            self.exited += 1


@pytest.fixture
def terminal_size(monkeypatch: pytest.MonkeyPatch) -> TerminalSize:
    """Pretend the terminal is 80x24."""
    size = TerminalSize(rows=24, cols=80)
    monkeypatch.setattr(Terminal, "size", staticmethod(lambda: size))
    return size


@pytest.fixture
def raw_mode(monkeypatch: pytest.MonkeyPatch) -> FakeRawMode:
    fake = FakeRawMode()
    monkeypatch.setattr(Terminal, "raw_mode", staticmethod(fake))
    return fake


@pytest.fixture
def globe() -> RecordingGlobe:
    return RecordingGlobe()
