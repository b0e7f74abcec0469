"""Tests for terminal capability handling and the session guard."""

import os
import sys

import pytest

from globe_cli.cli.core.terminal import Terminal, TerminalError


class TestCapabilities:
    """Capability failures surface as TerminalError."""

    def test_size_without_tty(self, capsys) -> None:
        with pytest.raises(TerminalError):
            Terminal.size()

    def test_raw_mode_without_tty(self, monkeypatch) -> None:
        read_fd, write_fd = os.pipe()

        class PipeStdin:
            def fileno(self) -> int:
                return read_fd

        monkeypatch.setattr(sys, "stdin", PipeStdin())
        try:
            with pytest.raises(TerminalError, match="raw mode"):
                with Terminal.raw_mode():
                    pass
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_line_layout(self) -> None:
        assert Terminal.line('ab', 2) == '\x1b[2Kab\x1b[1B\x1b[2D'
        assert Terminal.line('', 0) == '\x1b[2K\x1b[1B'


class TestSession:
    """Acquire and release order of the session guard."""

    def test_order(self, raw_mode, capsys) -> None:
        with Terminal.session(mouse=True):
            Terminal.write('BODY')
        out = capsys.readouterr().out

        assert raw_mode.entered == raw_mode.exited == 1
        order = ['\x1b[?1049h', '\x1b[?25l', '\x1b[?12l', '\x1b[?1000h', 'BODY',
                 '\x1b[?1000l', '\x1b[?12h', '\x1b[?25h', '\x1b[?1049l']
        positions = [out.index(seq) for seq in order]
        assert positions == sorted(positions)

    def test_restores_on_error(self, raw_mode, capsys) -> None:
        with pytest.raises(KeyError):
            with Terminal.session(mouse=False):
                raise KeyError("boom")
        out = capsys.readouterr().out
        assert '\x1b[?25h' in out
        assert '\x1b[?12h' in out
        assert '\x1b[?1000l' not in out
        assert raw_mode.exited == 1

    def test_failed_restore_step_does_not_skip_others(self, raw_mode, monkeypatch, capsys) -> None:
        def broken() -> None:
            raise TerminalError("no blinking here")

        monkeypatch.setattr(Terminal, "enable_blinking", staticmethod(broken))
        with Terminal.session(mouse=True):
            pass
        out = capsys.readouterr().out
        assert '\x1b[?1000l' in out
        assert '\x1b[?25h' in out
        assert raw_mode.exited == 1
