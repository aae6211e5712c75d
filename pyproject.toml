[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rpsarena"
version = "0.1.0"
description = "A networked rock-paper-scissors match server and client with simulated players"
requires-python = ">=3.10"
dependencies = []
keywords = ["rock-paper-scissors", "game", "asyncio", "tcp", "matchmaking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
rpsarena-server = "rpsarena.server:main"
rpsarena-client = "rpsarena.client:main"

[tool.hatch.build.targets.wheel]
packages = ["rpsarena"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
