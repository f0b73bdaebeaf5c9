"""Text views of the game: map, status, combat debug panel and menus."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .state import MessageLog
from .world import World

MAP_WIDTH = 35
MAP_HEIGHT = 25


@dataclass
class GameOverStats:
    """What is shown on the game-over screen."""

    killer_name: str = ""
    player_level: int = 0
    monsters_slain: int = 0
    final_stats: tuple[int, int, int, int] | None = None


def capture_game_over_stats(world: World, monster_id: int | None) -> GameOverStats:
    """Record the player's final stats and the name of the monster fought last."""
    result = GameOverStats()
    player = world.player()
    if player is not None and player.stats is not None:
        s = player.stats
        result.final_stats = (s.strength, s.dexterity, s.intelligence, s.constitution)
    monster = world.get(monster_id)
    if monster is not None and monster.monster is not None and monster.name is not None:
        result.killer_name = monster.name
    result.monsters_slain = 0
    return result


def render_map(world: World) -> list[str]:
    """Rows of the map centred on the player; empty if there is no player."""
    player = world.player()
    if player is None or player.position is None:
        return []
    origin = player.position
    glyphs: dict[tuple[int, int], str] = {}
    for entity in world.entities():
        pos = entity.position
        if pos is None or pos.level != origin.level:
            continue
        if entity.player is not None:
            glyph = "@"
        elif entity.monster is not None:
            glyph = "g"
        else:
            glyph = "?"
        glyphs[(pos.x, pos.y)] = glyph

    rows = []
    for y in range(MAP_HEIGHT):
        world_y = origin.y - (y - MAP_HEIGHT // 2)
        rows.append("".join(
            glyphs.get((origin.x + x - MAP_WIDTH // 2, world_y), ".") + " "
            for x in range(MAP_WIDTH)
        ))
    return rows


def status_line(world: World) -> str:
    """The player's health, stats, combat stats and position on one line."""
    player = world.player()
    if player is None or None in (player.health, player.stats, player.combat, player.position):
        return ""
    h, s, c, p = player.health, player.stats, player.combat, player.position
    return " | ".join([
        f"HP: {h.current}/{h.max}",
        f"STR: {s.strength}",
        f"DEX: {s.dexterity}",
        f"INT: {s.intelligence}",
        f"CON: {s.constitution}",
        f"DMG: {c.damage}",
        f"DEF: {c.defense}",
        f"ACC: {c.accuracy}",
        f"EVA: {c.evasion}",
        f"Pos: ({p.x}, {p.y})",
    ])


def _turns_to_kill(health: int, damage: int) -> int:
    return math.ceil(health / damage)


def monster_debug_lines(world: World, monster_id: int | None) -> list[str]:
    """Details of the monster in combat and the odds against the player."""
    lines = ["Monster Debug Info"]
    if monster_id is None:
        return lines + ["No monster in combat"]
    m = world.get(monster_id)
    if m is None or m.monster is None or None in (m.name, m.health, m.stats, m.combat):
        return lines + ["Monster data not found!"]

    health, stats, combat = m.health, m.stats, m.combat
    lines.append(m.name)
    if m.template_ref is not None:
        lines.append(f"Template: {m.template_ref}")
    lines.append(f"Entity ID: {m.id}")

    ratio = health.current / health.max if health.max else 0.0
    lines += [
        "Health",
        f"Current: {health.current} / {health.max}",
        f"{ratio * 100.0:.0f}%",
        "Base Stats",
        f"Strength: {stats.strength}",
        f"Dexterity: {stats.dexterity}",
        f"Intelligence: {stats.intelligence}",
        f"Constitution: {stats.constitution}",
        "Combat Stats",
        f"Damage: {combat.damage}",
        f"Defense: {combat.defense}",
        f"Accuracy: {combat.accuracy}%",
        f"Evasion: {combat.evasion}%",
        "Combat Calculations vs Player",
    ]

    player = world.player()
    if player is None or player.health is None or player.combat is None:
        return lines
    pc = player.combat
    m_hit = combat.accuracy - pc.evasion
    m_damage = max(1, combat.damage - pc.defense)
    p_hit = pc.accuracy - combat.evasion
    p_damage = max(1, pc.damage - combat.defense)
    lines += [
        "Monster → Player:",
        f"Hit Chance: {combat.accuracy}% - {pc.evasion}% = {m_hit}%",
        f"Damage: {combat.damage} - {pc.defense} = {m_damage}",
        f"Turns to kill: ~{_turns_to_kill(player.health.current, m_damage)}",
        "Player → Monster:",
        f"Hit Chance: {pc.accuracy}% - {combat.evasion}% = {p_hit}%",
        f"Damage: {pc.damage} - {combat.defense} = {p_damage}",
        f"Turns to kill: ~{_turns_to_kill(health.current, p_damage)}",
    ]
    return lines


def game_over_lines(stats: GameOverStats) -> list[str]:
    """The game-over screen."""
    lines = ["GAME OVER"]
    if stats.killer_name:
        lines.append(f"You were slain by {stats.killer_name}!")
    else:
        lines.append("You have died!")
    lines.append("Final Statistics")
    if stats.final_stats is not None:
        strength, dexterity, intelligence, constitution = stats.final_stats
        lines.append(
            f"STR: {strength} | DEX: {dexterity} | INT: {intelligence} | CON: {constitution}"
        )
    if stats.monsters_slain > 0:
        lines.append(f"Monsters Slain: {stats.monsters_slain}")
    lines += [
        "[M] Return to Main Menu   [Q] Quit Game",
        "Press M for Main Menu or Q to Quit",
    ]
    return lines


def main_menu_lines() -> list[str]:
    """The main menu screen."""
    return ["MYTHS OF ULAN", "[N] New Game", "[Q] Quit"]


def message_lines(log: MessageLog, limit: int | None = None) -> list[str]:
    """Texts of the newest messages, oldest first; all of them without a limit."""
    texts = [text for text, _ in log.messages]
    if limit is None:
        return texts
    if limit <= 0:
        return []
    return texts[-limit:]