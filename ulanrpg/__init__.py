"""A turn-based terminal roguelike with data-driven monsters, items, NPCs and loot tables."""

__version__ = "0.1.0"