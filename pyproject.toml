[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "delvekit"
version = "0.1.0"
description = "Building blocks for grid-based dungeon games: spatial partitioning, entity templates and z-buffered tile rendering"
requires-python = ">=3.10"
dependencies = []
keywords = ["roguelike", "dungeon", "ecs", "spatial-grid", "templates", "tiles"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["delvekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
