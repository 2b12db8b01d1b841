"""
ANSI renderer: draws a GameState snapshot in place on the terminal.
"""

import sys
from typing import List, Optional, TextIO

from domain.constants import BONUS_POINTS, BONUS_FOOD, SpeedTier
from domain.food import BONUS
from domain.game_state import GameState

HOME = "\033[H"
CLEAR = "\033[2J"
CLEAR_TO_END = "\033[J"
HIDE_CURSOR = "\033[?25l"
SHOW_CURSOR = "\033[?25h"


class Renderer:
    """
    Writes frames to ``stream``. Each frame homes the cursor and overdraws
    the previous one, so there is no flicker from clearing every tick.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream or sys.stdout
        self._message: Optional[str] = None

    def open(self) -> None:
        self.stream.write(HIDE_CURSOR + CLEAR + HOME)
        self.stream.flush()

    def close(self) -> None:
        self.stream.write(SHOW_CURSOR + "\n")
        self.stream.flush()

    def message(self, text: Optional[str]) -> None:
        """Show ``text`` under the board until replaced (None clears it)."""
        self._message = text

    def status_lines(self, state: GameState) -> List[str]:
        lines = [
            "",
            f"  Score: {state.score:6d}  |  High Score: {state.high_score:6d}"
            f"  |  Level: {state.level:3d}  |  Length: {state.length:3d}",
        ]

        modes = [SpeedTier(state.speed_tier).name.lower()]
        if state.easy_mode:
            modes.append("easy")
        if state.wrap_mode:
            modes.append("wrap")
        lines.append(f"  Mode: {', '.join(modes)}")

        if BONUS in state.foods and not state.game_over and not state.paused:
            lines.append(f"  [BONUS FOOD AVAILABLE! {BONUS_FOOD} = {BONUS_POINTS} points]")

        if state.paused:
            lines.append("  [PAUSED] P=Resume | K=Save | L=Load | Q=Quit")

        if state.game_over:
            lines.extend([
                "",
                "  ========================================",
                "  |         GAME OVER!                   |",
                f"  |         Final Score: {state.score:6d}          |",
                f"  |         Level Reached: {state.level:3d}           |",
                "  ========================================",
            ])
            if state.new_high_score:
                lines.append("  *** NEW HIGH SCORE! ***")
            lines.append("  Press 'R' to restart or 'Q' to quit")
        elif not state.paused:
            lines.append("  Controls: Arrow Keys or WASD | P=Pause | Q=Quit")

        if self._message:
            lines.append(f"  {self._message}")
        return lines

    def render_frame(self, state: GameState) -> str:
        board = state.print_board()
        return "\n".join([board] + self.status_lines(state))

    def draw(self, state: GameState) -> None:
        self.stream.write(HOME + self.render_frame(state) + "\n" + CLEAR_TO_END)
        self.stream.flush()

    def draw_text(self, lines: List[str]) -> None:
        """Draw a full-screen text page (start screen, notices)."""
        self.stream.write(HOME + CLEAR + "\n".join(lines) + "\n")
        self.stream.flush()
