"""The game loop: state transitions, input handling and screen rendering."""

from __future__ import annotations

import argparse
import logging
import random
import sys

from .combat import CombatEncounter
from .components import CombatStats, Health, Player, Position, Stats
from .loader import GameData
from .player import direction_for_key, move_player
from .render import (
    GameOverStats,
    capture_game_over_stats,
    game_over_lines,
    main_menu_lines,
    message_lines,
    monster_debug_lines,
    render_map,
    status_line,
)
from .spawning import spawn_random_goblins
from .state import Color, GameState, MessageLog
from .world import World

log = logging.getLogger(__name__)

WELCOME = "Welcome to Myths of Ulan! Move with WASD or arrow keys."
MESSAGES_SHOWN = 10
_MENU_KEYS = ("escape", "esc")


class Game:
    """One running game: the world, the message log and the current screen."""

    def __init__(self, data: GameData | None = None, rng: random.Random | None = None) -> None:
        self.data = data if data is not None else GameData()
        self.rng = rng if rng is not None else random.Random()
        self.world = World()
        self.log = MessageLog()
        self.state = GameState.MAIN_MENU
        self.encounter: CombatEncounter | None = None
        self.game_over_stats = GameOverStats()
        self.running = True

    def _despawn_actors(self) -> None:
        for entity in self.world.entities():
            if entity.player is not None or entity.monster is not None:
                self.world.despawn(entity.id)

    def new_game(self) -> None:
        """Clear any previous game, place the player and goblins, start exploring."""
        self.state = GameState.NEW_GAME_SETUP
        self.encounter = None
        self._despawn_actors()
        self.log.clear()
        self.world.spawn(
            player=Player(),
            position=Position(0, 0, 0),
            health=Health(30, 30),
            stats=Stats(strength=10, dexterity=10, intelligence=10, constitution=10),
            combat=CombatStats(damage=5, defense=2, accuracy=75, evasion=10),
            name="Player",
        )
        spawn_random_goblins(self.world, self.data.monsters, self.rng)
        self.log.add(WELCOME, Color.LIME_GREEN)
        log.info("Game setup complete, transitioning to Exploring state.")
        self.state = GameState.EXPLORING

    def _quit(self) -> None:
        self.running = False

    def _leave_combat(self, new_state: GameState) -> None:
        if new_state is GameState.GAME_OVER and self.encounter is not None:
            self.game_over_stats = capture_game_over_stats(self.world, self.encounter.monster_id)
        self.encounter = None
        self.state = new_state

    def _handle_main_menu(self, key: str) -> None:
        if key == "n":
            self.new_game()
        elif key == "q":
            self._quit()

    def _handle_exploring(self, key: str) -> None:
        if key in _MENU_KEYS:
            self.state = GameState.MAIN_MENU
            return
        step = direction_for_key(key)
        if step is None:
            return
        monster_id = move_player(self.world, self.log, *step)
        if monster_id is not None:
            self.state = GameState.IN_COMBAT
            self.encounter = CombatEncounter(self.world, self.log, monster_id)

    def _handle_combat(self, key: str) -> None:
        if key in _MENU_KEYS:
            self._leave_combat(GameState.MAIN_MENU)
            return
        if key != "a" or self.encounter is None:
            return
        self.encounter.player_attack(self.rng)
        outcome = self.encounter.check_end()
        if outcome is None:
            self.encounter.monster_turn(self.rng)
            outcome = self.encounter.check_end()
        if outcome is not None:
            self._leave_combat(outcome)

    def _handle_game_over(self, key: str) -> None:
        if key == "m":
            self.game_over_stats = GameOverStats()
            self._despawn_actors()
            self.state = GameState.MAIN_MENU
        elif key == "q":
            self._quit()

    def handle_key(self, key: str) -> bool:
        """Act on one key press; returns whether the game keeps running."""
        key = key.strip().lower()
        handlers = {
            GameState.MAIN_MENU: self._handle_main_menu,
            GameState.EXPLORING: self._handle_exploring,
            GameState.IN_COMBAT: self._handle_combat,
            GameState.GAME_OVER: self._handle_game_over,
        }
        handler = handlers.get(self.state)
        if handler is not None and key:
            handler(key)
        return self.running

    def render(self) -> str:
        """The current screen as text."""
        if self.state is GameState.MAIN_MENU:
            return "\n".join(main_menu_lines())
        if self.state is GameState.GAME_OVER:
            return "\n".join(game_over_lines(self.game_over_stats))
        if self.state in (GameState.EXPLORING, GameState.IN_COMBAT):
            lines = [status_line(self.world), ""]
            lines += render_map(self.world)
            if self.state is GameState.IN_COMBAT:
                monster_id = self.encounter.monster_id if self.encounter else None
                lines += [""] + monster_debug_lines(self.world, monster_id)
            lines += ["", "Message Log"] + message_lines(self.log, MESSAGES_SHOWN)
            return "\n".join(lines)
        return ""


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Play Myths of Ulan in the terminal.")
    parser.add_argument("--data-dir", default="data", help="game data directory (default: data)")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    data = GameData.load(args.data_dir)
    log.info("Successfully loaded %d monster templates", data.monsters.count())
    game = Game(data, random.Random(args.seed))
    while game.running:
        print(game.render())
        line = sys.stdin.readline()
        if not line:
            break
        game.handle_key(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())