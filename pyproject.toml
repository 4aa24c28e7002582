[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "o2sync"
version = "0.1.0"
description = "Player state model, broadcast wire codec and sync-group session tracking for multiplayer A Link to the Past"
requires-python = ">=3.10"
dependencies = []
keywords = ["snes", "alttp", "multiplayer", "sync", "protocol"]
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["o2sync"]

[tool.pytest.ini_options]
addopts = "-ra"
