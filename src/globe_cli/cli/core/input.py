"""Keyboard, mouse and resize input with event abstraction."""

from __future__ import annotations

import codecs
import os
import re
import sys
import select
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional, Union

from globe_cli.cli.core.terminal import TerminalError, TerminalSize


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()
    INSERT = auto()
    F1 = auto()
    F2 = auto()
    F3 = auto()
    F4 = auto()
    F5 = auto()
    F10 = auto()
    F12 = auto()


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character if printable or Ctrl+letter
    ctrl: bool = False
    raw: str = ""  # Raw escape sequence

    @property
    def is_char(self) -> bool:
        """Check if this is a character key (plain or with Ctrl)."""
        return self.char is not None and self.key is None


class MouseKind(Enum):
    PRESS = auto()
    RELEASE = auto()
    DRAG = auto()
    MOVE = auto()
    SCROLL_UP = auto()
    SCROLL_DOWN = auto()


@dataclass(frozen=True)
class MouseEvent:
    """A decoded mouse report; x and y are 0-indexed terminal cells."""
    kind: MouseKind
    x: int
    y: int
    button: int = 0
    raw: str = ""


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""
    size: TerminalSize


Event = Union[KeyEvent, MouseEvent, ResizeEvent]


class InputReader:
    """
    Non-blocking terminal event reader.

    Uses os.read() to bypass Python's I/O buffering and properly
    handle escape sequences that may arrive split across reads.
    Resizes are noticed by comparing the terminal size before each poll.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[str, Key] = {
        # Arrow keys (CSI)
        '[A': Key.UP,
        '[B': Key.DOWN,
        '[C': Key.RIGHT,
        '[D': Key.LEFT,
        # Arrow keys (SS3 - application mode)
        'OA': Key.UP,
        'OB': Key.DOWN,
        'OC': Key.RIGHT,
        'OD': Key.LEFT,
        # Navigation
        '[H': Key.HOME,
        '[F': Key.END,
        '[1~': Key.HOME,
        '[4~': Key.END,
        '[5~': Key.PAGE_UP,
        '[6~': Key.PAGE_DOWN,
        '[2~': Key.INSERT,
        '[3~': Key.DELETE,
        # Function keys
        'OP': Key.F1,
        'OQ': Key.F2,
        'OR': Key.F3,
        'OS': Key.F4,
        '[15~': Key.F5,
        '[21~': Key.F10,
        '[24~': Key.F12,
    }

    SIMPLE_KEYS: dict[str, Key] = {
        '\r': Key.ENTER,
        '\n': Key.ENTER,
        '\t': Key.TAB,
        '\x7f': Key.BACKSPACE,
        '\x08': Key.BACKSPACE,
    }

    # SGR (1006) mouse report: ESC [ < button ; col ; row (M press | m release)
    MOUSE_PATTERN = re.compile(r'\[<(\d+);(\d+);(\d+)([Mm])')

    def __init__(
        self,
        size_provider: Optional[Callable[[], TerminalSize]] = None,
        fd: Optional[int] = None,
    ) -> None:
        self._buffer = ""
        # Holds back a multibyte character cut at a read boundary
        self._decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._size_provider = size_provider
        self._last_size = size_provider() if size_provider else None

    def read(self, timeout: float = 0.1) -> Optional[Event]:
        """
        Read a single event.

        Returns None if no input available within timeout.
        """
        resize = self._check_resize()
        if resize is not None:
            return resize

        # Process any buffered input first
        if self._buffer:
            return self._process_buffer()

        if not self._has_input(timeout):
            return None

        # Read all available input using os.read to bypass Python buffering
        self._read_available()

        if self._buffer:
            return self._process_buffer()

        return None

    def _check_resize(self) -> Optional[ResizeEvent]:
        if self._size_provider is None:
            return None
        size = self._size_provider()
        if size == self._last_size:
            return None
        self._last_size = size
        return ResizeEvent(size)

    def _read_available(self) -> None:
        """Read all currently available input into buffer using os.read."""
        try:
            # Read up to 1024 bytes at once - gets everything available
            data = os.read(self._fd, 1024)
        except BlockingIOError:
            return
        except OSError as e:
            raise TerminalError(f"Cannot read terminal input: {e}") from e
        self._buffer += self._decoder.decode(data)

    def _escape_incomplete(self) -> bool:
        """True while the buffer starts with an escape sequence still missing its final byte."""
        if len(self._buffer) == 1:
            return True
        if self._buffer[1] not in '[O':
            return False
        for ch in self._buffer[2:]:
            if ch == '\x1b' or ch.isalpha() or ch == '~':
                return False
        return True

    def _wait_for_escape_sequence(self) -> None:
        """
        Read more input until the leading escape sequence is complete.

        A read can stop in the middle of a sequence (a long burst of mouse
        reports overflows one chunk), so the tail is never decoded until
        its final byte arrives or 100ms pass without it.
        """
        deadline = time.monotonic() + 0.1  # 100ms total wait

        while self._escape_incomplete():
            remaining = deadline - time.monotonic()
            wait_time = min(remaining, 0.025)  # 25ms intervals

            if wait_time <= 0:
                break

            if self._has_input(wait_time):
                self._read_available()

    def _process_buffer(self) -> Optional[Event]:
        """Process buffered input and return next event."""
        if not self._buffer:
            return None

        ch = self._buffer[0]

        # Simple keys
        if ch in self.SIMPLE_KEYS:
            self._buffer = self._buffer[1:]
            return KeyEvent(key=self.SIMPLE_KEYS[ch], raw=ch)

        # Escape sequence
        if ch == '\x1b':
            if self._escape_incomplete():
                self._wait_for_escape_sequence()
            return self._parse_escape_sequence()

        self._buffer = self._buffer[1:]

        # Printable character
        if ch.isprintable():
            return KeyEvent(char=ch, raw=ch)

        # Ctrl+letter arrives as \x01..\x1a
        if '\x01' <= ch <= '\x1a':
            return KeyEvent(char=chr(ord(ch) + 96), ctrl=True, raw=ch)

        # Unknown control character - skip it
        return None

    def _parse_escape_sequence(self) -> Event:
        """Parse an escape sequence from the buffer."""
        # Buffer starts with \x1b
        if len(self._buffer) == 1:
            # Just escape, no sequence
            self._buffer = ""
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        # Look for matching sequence (without the \x1b prefix)
        rest = self._buffer[1:]

        # Find where this sequence ends; the CSI/SS3 introducer never does
        start = 1 if rest[0] in '[O' else 0
        end_idx = start
        for i in range(start, len(rest)):
            ch = rest[i]
            if ch == '\x1b':
                # Start of next escape sequence
                end_idx = i
                break
            if ch.isalpha() or ch == '~':
                # End of this sequence
                end_idx = i + 1
                break
            end_idx = i + 1

        if end_idx == 0:
            # Nothing after escape
            self._buffer = self._buffer[1:]
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        seq = rest[:end_idx]
        raw = '\x1b' + seq
        self._buffer = self._buffer[1 + end_idx:]

        if seq in self.SEQUENCES:
            return KeyEvent(key=self.SEQUENCES[seq], raw=raw)

        mouse = self._parse_mouse(seq, raw)
        if mouse is not None:
            return mouse

        # Alt+key arrives as ESC followed by the character
        if len(seq) == 1 and seq.isprintable():
            return KeyEvent(char=seq, raw=raw)

        # Unknown sequence
        return KeyEvent(raw=raw)

    def _parse_mouse(self, seq: str, raw: str) -> Optional[MouseEvent]:
        """Decode an SGR mouse report."""
        match = self.MOUSE_PATTERN.fullmatch(seq)
        if not match:
            return None

        code = int(match.group(1))
        x = int(match.group(2)) - 1
        y = int(match.group(3)) - 1
        button = code & 3

        if code & 64:
            kind = MouseKind.SCROLL_DOWN if code & 1 else MouseKind.SCROLL_UP
        elif match.group(4) == 'm':
            kind = MouseKind.RELEASE
        elif code & 32:
            # Motion with no button held reports button 3
            kind = MouseKind.MOVE if button == 3 else MouseKind.DRAG
        else:
            kind = MouseKind.PRESS

        return MouseEvent(kind=kind, x=x, y=y, button=button, raw=raw)

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
        except (ValueError, OSError) as e:
            raise TerminalError(f"Cannot poll terminal input: {e}") from e
        return bool(ready)
