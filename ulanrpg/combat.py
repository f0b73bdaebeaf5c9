"""Turn-based combat between the player and one monster."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from .state import Color, GameState, MessageLog, TurnState
from .world import World


@dataclass(frozen=True)
class AttackOutcome:
    """What one attack did."""

    hit: bool
    damage: int = 0
    slain: bool = False


def _hit_roll(rng: random.Random) -> int:
    # A signed 32-bit draw taken modulo 100 with truncation, giving -99..99.
    value = rng.getrandbits(32) - (1 << 31)
    remainder = abs(value) % 100
    return -remainder if value < 0 else remainder


def resolve_attack(
    world: World,
    log: MessageLog,
    attacker_id: int,
    defender_id: int,
    rng: random.Random | None = None,
) -> AttackOutcome | None:
    """Resolve one attack; None if either side lacks health, combat stats or a name."""
    rng = rng if rng is not None else random.Random()
    if attacker_id == defender_id:
        return None
    attacker, defender = world.get(attacker_id), world.get(defender_id)
    for e in (attacker, defender):
        if e is None or e.health is None or e.combat is None or e.name is None:
            return None

    hit_chance = attacker.combat.accuracy - defender.combat.evasion
    if _hit_roll(rng) >= hit_chance:
        log.add(f"{attacker.name} misses {defender.name}!", Color.GRAY)
        return AttackOutcome(hit=False)

    damage = max(1, attacker.combat.damage - defender.combat.defense)
    defender.health.current -= damage
    log.add(f"{attacker.name} hits {defender.name} for {damage} damage!", Color.RED)
    slain = defender.health.current <= 0
    if slain:
        log.add(f"{defender.name} has been slain!", Color.DARK_GRAY)
        if defender.player is None:
            world.despawn(defender_id)
    return AttackOutcome(hit=True, damage=damage, slain=slain)


@dataclass
class CombatEncounter:
    """A fight against one monster; the player always moves first."""

    world: World
    log: MessageLog
    monster_id: int | None
    turn: TurnState = field(default=TurnState.PLAYER_TURN)

    def __post_init__(self) -> None:
        self.turn = TurnState.PLAYER_TURN
        self.log.add("Combat begins! Press 'A' to attack.", Color.ORANGE_RED)

    def _attack(self, attacker_id: int, defender_id: int, rng) -> AttackOutcome | None:
        outcome = resolve_attack(self.world, self.log, attacker_id, defender_id, rng)
        if outcome is not None:
            self.turn = self.turn.other()
        return outcome

    def player_attack(self, rng: random.Random | None = None) -> AttackOutcome | None:
        """The player attacks, if it is the player's turn."""
        if self.turn is not TurnState.PLAYER_TURN:
            return None
        player = self.world.player()
        if player is None:
            self.log.add("No player found!", Color.RED)
            return None
        if self.monster_id is None:
            self.log.add("No monster in combat!", Color.RED)
            return None
        return self._attack(player.id, self.monster_id, rng)

    def monster_turn(self, rng: random.Random | None = None) -> AttackOutcome | None:
        """The monster strikes back, if it is its turn and it still lives."""
        if self.turn is not TurnState.MONSTER_TURN:
            return None
        monster = self.world.get(self.monster_id)
        if monster is None or monster.monster is None:
            return None
        player = self.world.player()
        if player is None:
            return None
        return self._attack(monster.id, player.id, rng)

    def check_end(self) -> GameState | None:
        """The state to move to if the fight is over, else None."""
        if self.monster_id is not None:
            monster = self.world.get(self.monster_id)
            if monster is None or monster.monster is None:
                self.log.add("You are victorious! You can move again.", Color.LIME_GREEN)
                return GameState.EXPLORING
        player = self.world.player()
        if player is not None and player.health is not None and player.health.current <= 0:
            self.log.add("You have been slain! Game Over.", Color.RED)
            return GameState.GAME_OVER
        return None