[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lcekit"
version = "1.1.3"
description = "Read and write Minecraft Legacy Console Edition file formats: saves, archives, colour tables, localization, thumbnails, soundbanks and regions."
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = [
    "minecraft",
    "legacy console edition",
    "save file",
    "arc",
    "loc",
    "col",
    "msscmp",
    "region",
    "binary formats",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: File Formats",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["lcekit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
