[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "platformkit"
version = "0.1.0"
description = "Engine core for 2D side-scrolling platformers: module lifecycle, input state, Tiled maps, GUI controls and entity management"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "platformer", "tilemap", "tiled", "gui", "game-loop", "2d"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["platformkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
