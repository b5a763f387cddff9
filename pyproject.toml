[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "composeops"
version = "0.1.0"
description = "Building blocks for multi-container project tooling: progress rendering, stack summaries, log printing, prompts and metrics categories"
requires-python = ">=3.10"
dependencies = []
keywords = ["containers", "compose", "progress", "logs", "stacks"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["composeops"]

[tool.hatch.build.targets.sdist]
include = ["composeops", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
