"""
Non-blocking keyboard input from a raw-mode terminal.

``decode_key`` turns the bytes read in one poll into at most one KeyEvent.
Arrow keys arrive as ``ESC [ A`` .. ``ESC [ D``; anything else starting with
ESC (a lone ESC, a cut-off or unknown sequence) decodes to no input.
"""

import logging
import os
import select
import sys
import termios
import tty
from dataclasses import dataclass
from typing import Optional

from domain.constants import UP, DOWN, LEFT, RIGHT

logger = logging.getLogger(__name__)

ESC = 0x1B

ARROW_CODES = {
    ord('A'): UP,
    ord('B'): DOWN,
    ord('C'): RIGHT,
    ord('D'): LEFT,
}

READ_CHUNK = 32


@dataclass(frozen=True)
class KeyEvent:
    char: Optional[str] = None
    arrow: Optional[str] = None


def decode_key(data: bytes) -> Optional[KeyEvent]:
    """
    Decode one key press from the bytes read in a single poll.

    Only the first key is returned; the rest of the buffer is dropped, the
    same way a key press per tick is consumed.
    """
    if not data:
        return None

    if data[0] == ESC:
        if len(data) >= 3 and data[1] == ord('[') and data[2] in ARROW_CODES:
            return KeyEvent(arrow=ARROW_CODES[data[2]])
        return None

    char = chr(data[0])
    if char in ("\r", "\n") or char.isprintable():
        return KeyEvent(char=char)
    return None


class TerminalInput:
    """
    Puts stdin into raw, no-echo mode for the duration of a ``with`` block.

    Example:
        with TerminalInput() as keys:
            event = keys.poll_key()
    """

    def __init__(self, stream=None):
        self.stream = stream or sys.stdin
        self.fd = self.stream.fileno()
        self._saved_attrs = None

    def __enter__(self) -> "TerminalInput":
        self._saved_attrs = termios.tcgetattr(self.fd)
        tty.setcbreak(self.fd)
        logger.debug("Terminal switched to cbreak mode")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def restore(self) -> None:
        if self._saved_attrs is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None
            logger.debug("Terminal settings restored")

    def key_ready(self, timeout: float = 0.0) -> bool:
        readable, _, _ = select.select([self.fd], [], [], timeout)
        return bool(readable)

    def poll_key(self) -> Optional[KeyEvent]:
        """Return the pending key press, or None without blocking."""
        if not self.key_ready():
            return None
        data = os.read(self.fd, READ_CHUNK)
        return decode_key(data)

    def wait_key(self, poll_interval: float = 0.1) -> KeyEvent:
        """Block until a decodable key is pressed."""
        while True:
            if self.key_ready(poll_interval):
                event = decode_key(os.read(self.fd, READ_CHUNK))
                if event is not None:
                    return event
