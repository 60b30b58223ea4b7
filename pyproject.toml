[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "courantfit"
version = "0.1.0"
description = "Least-squares approximation of two-variable functions by piecewise-linear Courant elements on a triangulated rectangle"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "finite elements",
    "approximation",
    "Courant basis",
    "Gram matrix",
    "sparse matrix",
    "conjugate gradient",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
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
courantfit = "courantfit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["courantfit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
