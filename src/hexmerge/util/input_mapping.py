"""Input translation — swipes and keys to directions or commands.

Screen coordinates: x grows right, y grows down.
"""

from __future__ import annotations

import math
from typing import Mapping, Optional, Union

from hexmerge.models.hex import Direction

COMMANDS = ("reset", "undo", "quit")

# (lower bound in degrees, direction); each sector is 60° wide
_SECTORS: tuple[tuple[float, Direction], ...] = (
    (30.0, Direction.SOUTHEAST),
    (90.0, Direction.SOUTHWEST),
    (150.0, Direction.WEST),
    (210.0, Direction.NORTHWEST),
    (270.0, Direction.NORTHEAST),
)


def swipe_to_direction(dx: float, dy: float) -> Direction:
    """Map a swipe vector to one of six 60° sectors.

    EAST covers [-30°, 30°); the others follow clockwise on screen.
    """
    angle = (math.degrees(math.atan2(dy, dx)) + 360.0) % 360.0
    if angle >= 330.0 or angle < 30.0:
        return Direction.EAST
    result = Direction.EAST
    for lower, direction in _SECTORS:
        if angle >= lower:
            result = direction
    return result


def is_swipe(dx: float, dy: float, elapsed_ms: float,
             threshold: float = 50.0, timeout: float = 300.0) -> bool:
    """A gesture counts as a swipe when it is long enough and quick enough."""
    return elapsed_ms <= timeout and math.hypot(dx, dy) >= threshold


def key_to_action(key: str, bindings: Mapping[str, str]) -> Optional[Union[Direction, str]]:
    """Resolve a key press.

    Returns:
        A Direction, a command name from COMMANDS, or None if unbound.
    """
    action = bindings.get(key)
    if action is None:
        return None
    if action in COMMANDS:
        return action
    try:
        return Direction[action.upper()]
    except KeyError:
        return None
