[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "conicalgebra"
version = "0.1.0"
description = "Sparse and dense linear algebra building blocks for interior point conic optimization solvers"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["linear algebra", "sparse matrix", "CSC", "optimization", "conic", "interior point"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["conicalgebra"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
