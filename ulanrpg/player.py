"""Player input mapping and movement on the map."""

from __future__ import annotations

from dataclasses import replace

from .state import Color, MessageLog
from .world import World

_KEY_DIRECTIONS: dict[str, tuple[int, int]] = {
    "w": (0, 1),
    "up": (0, 1),
    "arrowup": (0, 1),
    "s": (0, -1),
    "down": (0, -1),
    "arrowdown": (0, -1),
    "a": (-1, 0),
    "left": (-1, 0),
    "arrowleft": (-1, 0),
    "d": (1, 0),
    "right": (1, 0),
    "arrowright": (1, 0),
}


def direction_for_key(key: str) -> tuple[int, int] | None:
    """The (dx, dy) step a movement key stands for, or None for other keys."""
    return _KEY_DIRECTIONS.get(key.lower())


def move_player(world: World, log: MessageLog, dx: int, dy: int) -> int | None:
    """Step the player; bumping into a monster blocks the move and starts combat.

    Returns the id of the monster encountered, or None if there was none.
    """
    player = world.player()
    if player is None or player.position is None:
        return None
    pos = player.position
    target_x, target_y = pos.x + dx, pos.y + dy

    for monster in world.monsters():
        spot = monster.position
        if spot is None:
            continue
        if (spot.x, spot.y, spot.level) == (target_x, target_y, pos.level):
            log.add(f"You encounter {monster.name}! Press 'A' to attack.", Color.ORANGE_RED)
            return monster.id

    player.position = replace(pos, x=target_x, y=target_y)
    return None