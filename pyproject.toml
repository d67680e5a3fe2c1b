[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinykern"
version = "0.1.0"
description = "Block devices, ATA helpers and small kernel-style data structures in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = ["block-device", "ata", "checksum", "scheduler", "ring-buffer", "circular-list", "scancode"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tinykern"]

[tool.hatch.build.targets.sdist]
include = ["tinykern", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
