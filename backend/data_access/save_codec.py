"""
Line-oriented text codec for saved games.

The record layout is declared once in ``RECORD_LAYOUT`` and both directions
walk it, so writer and reader cannot drift apart:

    line 1     score foods_eaten easy_mode wrap_mode speed_tier
               bonus_active bonus_x bonus_y bonus_lifetime bonus_cooldown
               hazard_active hazard_x hazard_y hazard_cooldown
    line 2     food_x food_y
    line 3     N (body length)
    N lines    x y            (head first)
    last line  dx dy

All values are whitespace-separated integers; booleans are 0/1 and the
speed tier is its integer value.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Tuple

from domain.constants import SpeedTier, DIRECTION_VECTORS
from domain.geometry import Position


class SaveFormatError(ValueError):
    """Raised when saved data is missing fields, non-numeric or truncated."""


@dataclass
class SavedGame:
    score: int
    foods_eaten: int
    easy_mode: bool
    wrap_mode: bool
    speed_tier: SpeedTier
    bonus_active: bool
    bonus_x: int
    bonus_y: int
    bonus_lifetime: int
    bonus_cooldown: int
    hazard_active: bool
    hazard_x: int
    hazard_y: int
    hazard_cooldown: int
    food_x: int
    food_y: int
    body: List[Position] = field(default_factory=list)
    dx: int = 1
    dy: int = 0

    @property
    def direction(self) -> Tuple[int, int]:
        return (self.dx, self.dy)


def _parse_bool(token: str) -> bool:
    return int(token) != 0


def _parse_tier(token: str) -> SpeedTier:
    return SpeedTier(int(token))


# (field name, parser) pairs; writers always emit int(value)
Fields = Tuple[Tuple[str, Callable[[str], Any]], ...]

HEADER_FIELDS: Fields = (
    ("score", int),
    ("foods_eaten", int),
    ("easy_mode", _parse_bool),
    ("wrap_mode", _parse_bool),
    ("speed_tier", _parse_tier),
    ("bonus_active", _parse_bool),
    ("bonus_x", int),
    ("bonus_y", int),
    ("bonus_lifetime", int),
    ("bonus_cooldown", int),
    ("hazard_active", _parse_bool),
    ("hazard_x", int),
    ("hazard_y", int),
    ("hazard_cooldown", int),
)
FOOD_FIELDS: Fields = (("food_x", int), ("food_y", int))
HEADING_FIELDS: Fields = (("dx", int), ("dy", int))
BODY = "body"

RECORD_LAYOUT = (HEADER_FIELDS, FOOD_FIELDS, BODY, HEADING_FIELDS)


def _format_fields(saved: SavedGame, fields: Fields) -> str:
    return " ".join(str(int(getattr(saved, name))) for name, _ in fields)


def encode_saved(saved: SavedGame) -> bytes:
    """Serialize a SavedGame following RECORD_LAYOUT."""
    lines: List[str] = []
    for part in RECORD_LAYOUT:
        if part == BODY:
            lines.append(str(len(saved.body)))
            lines.extend(f"{x} {y}" for x, y in saved.body)
        else:
            lines.append(_format_fields(saved, part))
    return ("\n".join(lines) + "\n").encode("utf-8")


def _parse_fields(line: str, fields: Fields) -> Dict[str, Any]:
    tokens = line.split()
    if len(tokens) != len(fields):
        names = ", ".join(name for name, _ in fields)
        raise SaveFormatError(f"Expected {len(fields)} values ({names}), got {len(tokens)}: {line!r}")
    values = {}
    for (name, parse), token in zip(fields, tokens):
        try:
            values[name] = parse(token)
        except ValueError as e:
            raise SaveFormatError(f"Invalid value for {name}: {token!r}") from e
    return values


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise SaveFormatError(f"Save data ended before {what}") from None


def decode_saved(data: bytes) -> SavedGame:
    """
    Parse saved data produced by ``encode_saved``.

    Raises:
        SaveFormatError: on any missing, non-numeric or out-of-range field,
            or if the declared body length cannot be read in full.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SaveFormatError("Save data is not valid UTF-8") from e

    lines = iter(text.splitlines())
    values: Dict[str, Any] = {}
    for part in RECORD_LAYOUT:
        if part == BODY:
            count_line = _next_line(lines, "body length")
            length = _parse_fields(count_line, (("length", int),))["length"]
            if length < 1:
                raise SaveFormatError(f"Body length must be at least 1, got {length}")
            body = []
            for i in range(length):
                segment = _parse_fields(_next_line(lines, f"body segment {i}"), (("x", int), ("y", int)))
                body.append(Position(segment["x"], segment["y"]))
            values[BODY] = body
        else:
            values.update(_parse_fields(_next_line(lines, part[0][0]), part))

    if (values["dx"], values["dy"]) not in DIRECTION_VECTORS.values():
        raise SaveFormatError(f"Heading {(values['dx'], values['dy'])} is not a unit direction")

    return SavedGame(**values)
