"""Check that the game's data files parse."""

from __future__ import annotations

import argparse
import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TextIO

from .item_templates import parse_item_template
from .loot_tables import LootTable
from .monster_templates import MonsterTemplate, TemplateError
from .npc_templates import NPCTemplate


@dataclass(frozen=True)
class ValidationReport:
    """How many files one directory held and how many failed."""

    total: int = 0
    errors: int = 0
    missing: bool = False

    @property
    def ok(self) -> bool:
        return self.errors == 0


def _json_files(directory: Path) -> list[Path]:
    if directory.is_file():
        return [directory] if directory.suffix == ".json" else []
    return sorted(p for p in directory.rglob("*.json") if p.is_file())


def _parse_array(text: str, parse: Callable[[Any], Any]) -> list:
    raw = json.loads(text)
    if not isinstance(raw, list):
        raise TemplateError("expected a JSON array")
    return [parse(entry) for entry in raw]


def validate_directory(
    directory: str | os.PathLike,
    type_name: str,
    parse: Callable[[Any], Any],
    out: TextIO | None = None,
) -> ValidationReport:
    """Report on every JSON file under a directory, one line each."""
    out = out or sys.stdout
    directory = Path(directory)
    print(f'Validating {type_name} files in "{directory}"', file=out)
    if not directory.exists():
        print("  Directory does not exist!\n", file=out)
        return ValidationReport(missing=True)

    total = errors = 0
    for path in _json_files(directory):
        total += 1
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f'  ✗ "{path}" - Read error: {exc}', file=out)
            errors += 1
            continue
        try:
            items = _parse_array(text, parse)
        except ValueError as exc:
            print(f'  ✗ "{path}" - Parse error: {exc}', file=out)
            errors += 1
            continue
        print(f'  ✓ "{path}" - {len(items)} items', file=out)

    print(f"  Total: {total} files, {errors} errors\n", file=out)
    return ValidationReport(total, errors)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Validate game data files.")
    parser.add_argument("data_dir", nargs="?", default="data", help="data directory (default: data)")
    args = parser.parse_args(argv)

    print("Validating game data files...\n")
    base = Path(args.data_dir)
    validate_directory(base / "monsters", "Monster", MonsterTemplate.from_dict)
    validate_directory(base / "items", "Item", parse_item_template)
    validate_directory(base / "npcs", "NPC", NPCTemplate.from_dict)
    validate_directory(base / "loot_tables", "Loot Table", LootTable.from_dict)
    return 0


if __name__ == "__main__":
    sys.exit(main())