"""Low-level terminal operations - escape sequences and the session guard."""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator

logger = logging.getLogger(__name__)


class TerminalError(RuntimeError):
    """The terminal refused a capability the viewer needs."""


@dataclass(frozen=True)
class TerminalSize:
    """Terminal dimensions."""
    rows: int
    cols: int


class Terminal:
    """Terminal I/O abstraction for the globe viewer."""

    @staticmethod
    def size() -> TerminalSize:
        """Get current terminal dimensions."""
        try:
            size = os.get_terminal_size(sys.stdout.fileno())
        except (OSError, ValueError) as e:
            raise TerminalError(f"Cannot query terminal size: {e}") from e
        return TerminalSize(size.lines, size.columns)

    @staticmethod
    def hide_cursor() -> None:
        """Hide the cursor."""
        Terminal.write('\x1b[?25l')

    @staticmethod
    def show_cursor() -> None:
        """Show the cursor."""
        Terminal.write('\x1b[?25h')

    @staticmethod
    def disable_blinking() -> None:
        Terminal.write('\x1b[?12l')

    @staticmethod
    def enable_blinking() -> None:
        Terminal.write('\x1b[?12h')

    @staticmethod
    def enable_mouse_capture() -> None:
        """Report presses, button-held motion and wheel as SGR sequences."""
        Terminal.write('\x1b[?1000h\x1b[?1002h\x1b[?1006h')

    @staticmethod
    def disable_mouse_capture() -> None:
        Terminal.write('\x1b[?1006l\x1b[?1002l\x1b[?1000l')

    @staticmethod
    def move_to(row: int, col: int) -> None:
        """Move cursor to position (1-indexed)."""
        Terminal.write(f'\x1b[{row};{col}H')

    @staticmethod
    def write(text: str) -> None:
        """Write text to terminal."""
        try:
            sys.stdout.write(text)
            sys.stdout.flush()
        except (OSError, ValueError) as e:
            raise TerminalError(f"Cannot write to terminal: {e}") from e

    @staticmethod
    def line(glyphs: str, width: int) -> str:
        """
        Build one output row: clear the current line, print the glyphs,
        then step down a row and back to the left margin.
        """
        back = f'\x1b[{width}D' if width else ''
        return f'\x1b[2K{glyphs}\x1b[1B{back}'

    @staticmethod
    @contextmanager
    def raw_mode() -> Iterator[None]:
        """Context manager for raw terminal mode (Unix only)."""
        try:
            import termios
            import tty
        except ImportError as e:
            raise TerminalError("Raw mode needs a POSIX terminal (termios)") from e

        try:
            fd = sys.stdin.fileno()
            old_settings = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError, ValueError) as e:
            raise TerminalError(f"Cannot enable raw mode: {e}") from e
        try:
            yield
        finally:
            try:
                termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
            except termios.error:
                logger.exception("Failed to restore terminal settings")

    @staticmethod
    @contextmanager
    def alternate_screen() -> Iterator[None]:
        """Use alternate screen buffer (preserves scrollback)."""
        Terminal.write('\x1b[?1049h\x1b[2J\x1b[H')
        try:
            yield
        finally:
            _best_effort(Terminal.write, '\x1b[?1049l')

    @staticmethod
    @contextmanager
    def session(mouse: bool = False) -> Iterator[None]:
        """
        Full viewer mode: alternate screen, raw input, hidden non-blinking
        cursor and, optionally, mouse capture.

        Everything acquired is released in reverse order on every exit
        path, including exceptions raised by the caller.
        """
        with Terminal.raw_mode(), Terminal.alternate_screen():
            logger.debug("Terminal session started (mouse=%s)", mouse)
            try:
                Terminal.hide_cursor()
                Terminal.disable_blinking()
                if mouse:
                    Terminal.enable_mouse_capture()
                yield
            finally:
                _restore(mouse)
                logger.debug("Terminal session ended")


def _restore(mouse: bool) -> None:
    """Undo the session setup in reverse order; a failing step does not skip the rest."""
    if mouse:
        _best_effort(Terminal.disable_mouse_capture)
    _best_effort(Terminal.enable_blinking)
    _best_effort(Terminal.show_cursor)


def _best_effort(step: Callable[..., None], *args: object) -> None:
    try:
        step(*args)
    except TerminalError:
        logger.exception("Terminal restore step %s failed", step.__name__)
