[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "folley"
version = "0.1.0"
description = "Interactive first-order logic proof assistant over natural numbers"
requires-python = ">=3.10"
dependencies = []
keywords = ["logic", "first-order logic", "proof assistant", "theorem proving", "peano"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
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
folley = "folley.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["folley"]

[tool.pytest.ini_options]
addopts = "-ra"
