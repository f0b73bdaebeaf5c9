"""Game state machine values and shared resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

MAX_MESSAGES = 100


class GameState(Enum):
    MAIN_MENU = "MainMenu"
    NEW_GAME_SETUP = "NewGameSetup"
    EXPLORING = "Exploring"
    IN_COMBAT = "InCombat"
    PAUSED = "Paused"
    GAME_OVER = "GameOver"


class TurnState(Enum):
    PLAYER_TURN = "PlayerTurn"
    MONSTER_TURN = "MonsterTurn"

    def other(self) -> "TurnState":
        if self is TurnState.PLAYER_TURN:
            return TurnState.MONSTER_TURN
        return TurnState.PLAYER_TURN


@dataclass(frozen=True)
class Color:
    """An RGB colour with channels in 0..1."""

    r: float
    g: float
    b: float

    LIME_GREEN: ClassVar["Color"]
    ORANGE_RED: ClassVar["Color"]
    RED: ClassVar["Color"]
    DARK_GRAY: ClassVar["Color"]
    GRAY: ClassVar["Color"]

    def to_rgb8(self) -> tuple[int, int, int]:
        return (int(self.r * 255.0), int(self.g * 255.0), int(self.b * 255.0))


Color.LIME_GREEN = Color(0.196, 0.804, 0.196)
Color.ORANGE_RED = Color(1.0, 0.271, 0.0)
Color.RED = Color(1.0, 0.0, 0.0)
Color.DARK_GRAY = Color(0.25, 0.25, 0.25)
Color.GRAY = Color(0.5, 0.5, 0.5)


@dataclass
class GameWorld:
    current_dungeon: str | None = None
    dungeon_level: int = 0
    turn_count: int = 0


@dataclass
class MessageLog:
    """Coloured messages, keeping only the most recent hundred."""

    messages: list[tuple[str, Color]] = field(default_factory=list)

    def add(self, message: str, color: Color) -> None:
        self.messages.append((message, color))
        if len(self.messages) > MAX_MESSAGES:
            del self.messages[0]

    def clear(self) -> None:
        self.messages.clear()