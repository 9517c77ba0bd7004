[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jigsat"
version = "0.1.0"
description = "Building blocks of a CDCL SAT solver: watched-literal propagation, conflict analysis, VSIDS/VMTF decisions, restarts, target phases and a preprocessor"
requires-python = ">=3.10"
dependencies = []
keywords = ["sat", "solver", "cdcl", "cnf", "boolean satisfiability", "unit propagation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
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
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["jigsat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
