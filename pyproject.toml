[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "osrank"
version = "0.1.0"
description = "Build normalised project/account network matrices, rank them with PageRank, and gather dependency and contribution data"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "requests",
]
keywords = ["osrank", "pagerank", "dependency graph", "open source", "ranking", "adjacency matrix"]
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
    "Topic :: Scientific/Engineering :: Information Analysis",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
osrank-source-dependencies = "osrank.source_dependencies:main"
osrank-source-contributions = "osrank.source_contributions:main"

[tool.hatch.build.targets.wheel]
packages = ["osrank"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
