[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bigrepair"
version = "0.1.0"
description = "RePair grammar compression for integer sequences, with dictionary and grammar-merging tools for prefix-free parsing"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "repair",
    "grammar compression",
    "straight-line program",
    "prefix-free parsing",
    "compression",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bigrepair-irepair = "bigrepair.irepair:main"
bigrepair-despair = "bigrepair.despair:main_chars"
bigrepair-idespair = "bigrepair.despair:main_ints"
bigrepair-procdic = "bigrepair.procdic:main"
bigrepair-postproc = "bigrepair.postproc:main"

[tool.hatch.build.targets.wheel]
packages = ["bigrepair"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
