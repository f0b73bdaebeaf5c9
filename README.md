# ulanrpg

A small turn-based roguelike played in the terminal. You walk around a grid,
bump into monsters and fight them turn by turn. Monster, item, NPC and loot
table templates are read from JSON data files.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Playing

```
ulanrpg [--data-dir DIR] [--seed N]
```

`--data-dir` is the game data directory (default `data`); `--seed` seeds the
random number generator so a game can be replayed.

The screen is printed as text, then one line of input is read; each line is
one key. Keys are not case-sensitive.

| Screen      | Keys |
|-------------|------|
| Main menu   | `n` new game, `q` quit |
| Exploring   | `w`/`a`/`s`/`d` (or `up`/`left`/`down`/`right`) move, `esc` back to the main menu |
| In combat   | `a` attack, `esc` back to the main menu |
| Game over   | `m` main menu, `q` quit |

A new game places the player at (0, 0) with 30 HP and spawns two goblins on
distinct fixed spots, chosen from monster templates whose `type` is `Goblin`
and whose level range overlaps 1–3. Walking into a monster blocks the move
and starts combat. The player always strikes first; each attack hits when a
roll falls under attacker accuracy minus defender evasion, and deals attacker
damage minus defender defence (at least 1). Killing the monster returns you
to exploring; dropping to 0 HP ends the game.

The map is 35 × 25 tiles centred on the player: `@` is the player, `g` a
monster, `.` empty ground. During combat a panel shows the monster's stats
and the hit chances and damage of both sides. The last ten messages of the
log are shown below the map; the log keeps the most recent hundred.

## Game data

```
data/
  monsters/      monster templates
  items/         weapons, armour, consumables, misc items
  npcs/          non-player characters
  loot_tables/   weighted loot tables
```

Every `*.json` file under these directories (searched recursively) holds a
JSON array of templates. A missing directory is treated as empty. To check
that every file parses:

```
ulanrpg-validate [DATA_DIR]
```

`DATA_DIR` defaults to `data`. For each kind it prints every file with the
number of templates it holds, or its read or parse error, then a count of
files and errors.

## Using it as a library

```python
import json
import random

from ulanrpg.components import Position
from ulanrpg.monster_templates import MonsterTemplateRegistry, spawn_monster_from_template
from ulanrpg.world import World

goblin = {
    "id": "goblin_scout", "name": "Goblin Scout", "family": "Humanoid", "type": "Goblin",
    "health": {"base_health": 10, "health_per_level": 3},
    "stats": {"base_strength": 6, "base_dexterity": 9, "base_intelligence": 4,
              "base_constitution": 6, "strength_per_level": 0.5, "dexterity_per_level": 1.0,
              "intelligence_per_level": 0.0, "constitution_per_level": 0.5},
    "combat": {"base_damage": 3, "base_defense": 1, "base_accuracy": 70,
               "base_evasion": 15, "damage_per_level": 0.5, "defense_per_level": 0.25},
    "ai_type": "Aggressive", "level_range": [1, 3], "experience_reward": 10,
    "loot_table_id": None, "display_char": "g", "display_color": [0.2, 0.8, 0.2],
}

registry = MonsterTemplateRegistry()
registry.load_from_json(json.dumps([goblin]))

world = World()
monster_id = spawn_monster_from_template(
    world, registry, "goblin_scout", Position(3, 4, 0), None, random.Random(1)
)
print(world.get(monster_id).name)   # e.g. "Goblin Scout (Lv.2)"
```

Main modules:

- `ulanrpg.loader` — `GameData.load(data_dir)` and `load_monsters`,
  `load_items`, `load_npcs`, `load_loot_tables`, `load_json_files`.
- `ulanrpg.monster_templates`, `ulanrpg.item_templates`,
  `ulanrpg.npc_templates`, `ulanrpg.loot_tables` — template classes and
  registries. Malformed data raises `TemplateError`.
- `ulanrpg.loot_tables` — `LootTableRegistry.roll_loot(table_id, level, luck, rng)`
  returns a list of `ItemLoot`, `GoldLoot` and `ExperienceLoot`; nested
  tables are rolled in place and an unknown table yields nothing.
- `ulanrpg.items` — `spawn_item_from_template` and `drop_loot`, which lays
  rolled loot out around a position.
- `ulanrpg.spawning` — `spawn_monster`, `spawn_random_monsters`,
  `spawn_random_goblins`, `get_appropriate_monsters_for_level`.
- `ulanrpg.combat` — `resolve_attack` and `CombatEncounter`.
- `ulanrpg.game` — `Game`, with `new_game()`, `handle_key(key)` and `render()`.

## What it does not do

- No data files come with the package; without a `data/monsters` directory
  holding goblin templates, a new game has the player alone on the map.
- It is text only: no window, graphics or real-time key handling.
- The game loop uses only monster templates. Items, NPCs and loot tables
  can be loaded, validated and used through the library, but the game
  neither drops loot nor places items or NPCs.
- There is no saving or loading of games, no player levelling or experience,
  and the game-over screen does not count monsters slain.