"""
Data access layer for the terminal snake game.

This module provides the file-backed leaderboard, the save-game codec,
and save-file reading and writing.
"""

from .score_store import ScoreStore, ScoreEntry
from .save_codec import SavedGame, SaveFormatError, encode_saved, decode_saved
from .save_file import read_save, write_save

__all__ = [
    'ScoreStore',
    'ScoreEntry',
    'SavedGame',
    'SaveFormatError',
    'encode_saved',
    'decode_saved',
    'read_save',
    'write_save',
]
