[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trake"
version = "0.1.0"
description = "Game model for a train-on-a-grid arcade game: rails, resources, quotas, shop upgrades and particles"
requires-python = ">=3.11"
dependencies = []
keywords = ["game", "train", "arcade", "simulation", "grid"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["trake"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
