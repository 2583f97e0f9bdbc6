[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hobbyos"
version = "0.1.0"
description = "Kernel building blocks and small userland tools of a hobby operating system: graphics, fonts, FAT volumes, ACPI tables, a console, a text editor model, games and command-line text tools."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating-system",
    "kernel",
    "fat32",
    "framebuffer",
    "acpi",
    "console",
    "text-editor",
    "minesweeper",
]
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
    "Topic :: System :: Operating System",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
hobbyos-hex2bin = "hobbyos.hex2bin:main"
hobbyos-sort = "hobbyos.sortlines:main"
hobbyos-cp = "hobbyos.cp:main"
hobbyos-grep = "hobbyos.grep:main"
hobbyos-more = "hobbyos.more:main"

[tool.hatch.build.targets.wheel]
packages = ["hobbyos"]

[tool.hatch.build.targets.sdist]
include = ["hobbyos", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
