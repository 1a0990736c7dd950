[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tspsolve"
version = "0.1.0"
description = "Travelling salesman heuristics: 2-opt local search variants, multi-start descents and genetic algorithms"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tsp",
    "travelling-salesman",
    "2-opt",
    "genetic-algorithm",
    "heuristics",
    "optimization",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tspsolve = "tspsolve.cli:main"
tspsolve-scalability = "tspsolve.cli:scalability"
tspsolve-parallelism = "tspsolve.cli:parallelism"
tspsolve-benchmark = "tspsolve.cli:benchmark"

[tool.hatch.build.targets.wheel]
packages = ["tspsolve"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
