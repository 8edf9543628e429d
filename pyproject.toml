[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lootserver"
version = "0.1.0"
description = "Server-side toolkit for a game backend: HTTP requests, filtered logging, and leaderboard and character data models"
requires-python = ">=3.10"
dependencies = []
keywords = ["games", "leaderboard", "backend", "server", "http"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lootserver"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
