"""
Reading and writing the save file.
"""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def write_save(path: Union[str, Path], data: bytes) -> None:
    """
    Write encoded save data to ``path``.

    Raises:
        OSError: if the file cannot be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    logger.info(f"Saved game to {path} ({len(data)} bytes)")


def read_save(path: Union[str, Path]) -> bytes:
    """
    Read encoded save data from ``path``.

    Raises:
        OSError: if the file is absent or unreadable
    """
    path = Path(path)
    data = path.read_bytes()
    logger.info(f"Read save file {path} ({len(data)} bytes)")
    return data
