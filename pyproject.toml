[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "headsup"
version = "0.1.0"
description = "Heads-up no-limit Texas Hold'em game engine with hand evaluation and a random-play demo"
requires-python = ">=3.10"
dependencies = []
keywords = ["poker", "holdem", "heads-up", "game", "hand-evaluator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
headsup-demo = "headsup.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["headsup"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
