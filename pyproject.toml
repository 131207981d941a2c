[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bomberlogic"
version = "0.1.0"
description = "Game logic for a grid-based bomb-laying arcade game: bombers, bombs, explosions, power-ups, computer opponents and a software audio mixer."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "arcade", "game-logic", "ai", "grid", "bombs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["bomberlogic"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
