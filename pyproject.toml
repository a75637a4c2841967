[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "echecs"
version = "0.1.0"
description = "A chess game for two players at one terminal, with move checking, check warnings and pawn promotion"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "echecs", "board game", "game", "terminal"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: French",
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
echecs = "echecs.app:main"

[tool.setuptools.packages.find]
include = ["echecs*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
