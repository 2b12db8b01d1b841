"""
Tests for services - key decoding, raw terminal input and the ANSI renderer.
"""

import io
import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import GameState, BONUS, REGULAR, SpeedTier, UP, DOWN, LEFT, RIGHT
from services.renderer import Renderer, HIDE_CURSOR, SHOW_CURSOR, HOME
from services.terminal_input import KeyEvent, TerminalInput, decode_key


class TestDecodeKey:
    """Tests for decode_key()."""

    @pytest.mark.parametrize("data,expected", [
        (b"\x1b[A", UP),
        (b"\x1b[B", DOWN),
        (b"\x1b[C", RIGHT),
        (b"\x1b[D", LEFT),
    ])
    def test_arrow_sequences(self, data, expected):
        """ESC [ A..D decode to arrow events."""
        assert decode_key(data) == KeyEvent(arrow=expected)

    @pytest.mark.parametrize("data", [
        b"",
        b"\x1b",
        b"\x1b[",
        b"\x1b[Z",
        b"\x1bOA",
        b"\x03",
    ])
    def test_no_input(self, data):
        """Empty, partial, unknown or control input decodes to None."""
        assert decode_key(data) is None

    def test_printable_char(self):
        """Printable characters keep their case."""
        assert decode_key(b"W") == KeyEvent(char="W")

    def test_enter_is_kept(self):
        """Carriage return and newline are passed through."""
        assert decode_key(b"\r") == KeyEvent(char="\r")
        assert decode_key(b"\n") == KeyEvent(char="\n")

    def test_only_first_key_is_used(self):
        """Several buffered keys yield only the first."""
        assert decode_key(b"wasd") == KeyEvent(char="w")
        assert decode_key(b"\x1b[Cq") == KeyEvent(arrow=RIGHT)


class _FdStream:
    def __init__(self, fd):
        self._fd = fd

    def fileno(self):
        return self._fd


class TestTerminalInput:
    """Tests for TerminalInput on a pseudo-terminal."""

    @pytest.fixture
    def pty_pair(self):
        pytest.importorskip("pty")
        master, slave = os.openpty()
        yield master, slave
        os.close(master)
        os.close(slave)

    def test_poll_without_input_returns_none(self, pty_pair):
        """poll_key() does not block when nothing was typed."""
        _, slave = pty_pair
        with TerminalInput(_FdStream(slave)) as keys:
            assert keys.poll_key() is None

    def test_poll_reads_arrow(self, pty_pair):
        """An arrow sequence typed on the terminal is decoded."""
        master, slave = pty_pair
        with TerminalInput(_FdStream(slave)) as keys:
            os.write(master, b"\x1b[A")
            assert keys.key_ready(timeout=1.0)
            assert keys.poll_key() == KeyEvent(arrow=UP)

    def test_settings_restored_on_exit(self, pty_pair):
        """Leaving the with-block restores the original terminal settings."""
        import termios

        _, slave = pty_pair
        before = termios.tcgetattr(slave)
        with TerminalInput(_FdStream(slave)):
            assert termios.tcgetattr(slave) != before
        assert termios.tcgetattr(slave) == before


def make_state(**overrides):
    values = dict(
        width=10,
        height=6,
        snake_positions=[(3, 2), (2, 2)],
        direction=(1, 0),
        foods={REGULAR: (6, 3)},
        score=40,
        high_score=90,
        level=2,
        foods_eaten=6,
        game_over=False,
        paused=False,
    )
    values.update(overrides)
    return GameState(**values)


class TestRenderer:
    """Tests for the ANSI renderer."""

    def test_frame_contains_board_and_status(self):
        """A frame is the board followed by the score line."""
        frame = Renderer(io.StringIO()).render_frame(make_state())
        lines = frame.split("\n")
        assert lines[0] == "#" * 10
        assert "@" in frame and "*" in frame
        assert "Score:     40" in frame
        assert "High Score:     90" in frame
        assert "Level:   2" in frame
        assert "Length:   2" in frame
        assert "Controls:" in frame

    def test_bonus_notice(self):
        """An active bonus is announced."""
        frame = Renderer(io.StringIO()).render_frame(
            make_state(foods={REGULAR: (6, 3), BONUS: (7, 4)})
        )
        assert "BONUS FOOD AVAILABLE" in frame

    def test_paused_banner(self):
        """The paused screen lists the save and load keys."""
        frame = Renderer(io.StringIO()).render_frame(make_state(paused=True))
        assert "[PAUSED]" in frame
        assert "K=Save" in frame
        assert "L=Load" in frame
        assert "Controls:" not in frame

    def test_game_over_box(self):
        """Game over shows the final score and restart hint."""
        frame = Renderer(io.StringIO()).render_frame(
            make_state(game_over=True, score=120, high_score=120, new_high_score=True)
        )
        assert "GAME OVER!" in frame
        assert "Final Score:    120" in frame
        assert "NEW HIGH SCORE" in frame
        assert "Press 'R' to restart" in frame

    def test_tied_high_score_has_no_banner(self):
        """Equalling the previous best is not announced as a new record."""
        frame = Renderer(io.StringIO()).render_frame(
            make_state(game_over=True, score=90, high_score=90)
        )
        assert "GAME OVER!" in frame
        assert "NEW HIGH SCORE" not in frame

    def test_mode_line(self):
        """Mode flags are listed under the score."""
        frame = Renderer(io.StringIO()).render_frame(
            make_state(easy_mode=True, wrap_mode=True, speed_tier=SpeedTier.SLOW)
        )
        assert "Mode: slow, easy, wrap" in frame

    def test_message_is_shown_until_cleared(self):
        """message() adds a line to every frame until set to None."""
        renderer = Renderer(io.StringIO())
        renderer.message("Game saved")
        assert "Game saved" in renderer.render_frame(make_state())
        renderer.message(None)
        assert "Game saved" not in renderer.render_frame(make_state())

    def test_draw_homes_cursor(self):
        """draw() writes one frame starting at the home position."""
        stream = io.StringIO()
        Renderer(stream).draw(make_state())
        assert stream.getvalue().startswith(HOME)

    def test_open_and_close_toggle_cursor(self):
        """The cursor is hidden while playing and shown again afterwards."""
        stream = io.StringIO()
        renderer = Renderer(stream)
        renderer.open()
        renderer.close()
        output = stream.getvalue()
        assert output.startswith(HIDE_CURSOR)
        assert SHOW_CURSOR in output
