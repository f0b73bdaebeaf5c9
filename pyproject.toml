[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ulanrpg"
version = "0.1.0"
description = "A small turn-based terminal roguelike with data-driven monsters, items, NPCs and loot tables"
requires-python = ">=3.10"
dependencies = []
keywords = ["roguelike", "rpg", "game", "turn-based", "loot", "monsters"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ulanrpg = "ulanrpg.game:main"
ulanrpg-validate = "ulanrpg.validate:main"

[tool.hatch.build.targets.wheel]
packages = ["ulanrpg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
