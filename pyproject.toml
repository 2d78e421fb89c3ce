[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spellborn-launcher"
version = "0.1.0"
description = "Minimal installer, updater and launcher for the Spellborn game client"
requires-python = ">=3.10"
keywords = ["spellborn", "launcher", "updater", "game", "installer"]
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
dependencies = [
    "requests",
    "tqdm",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
spellborn-launcher = "spellborn_launcher.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["spellborn_launcher"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
