"""Core TUI infrastructure - terminal I/O and input handling."""

from globe_cli.cli.core.terminal import Terminal, TerminalError, TerminalSize
from globe_cli.cli.core.input import (
    Event,
    InputReader,
    Key,
    KeyEvent,
    MouseEvent,
    MouseKind,
    ResizeEvent,
)

__all__ = [
    "Terminal",
    "TerminalError",
    "TerminalSize",
    "Event",
    "InputReader",
    "Key",
    "KeyEvent",
    "MouseEvent",
    "MouseKind",
    "ResizeEvent",
]
