[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "urbangen"
version = "0.1.1"
description = "Procedural city street networks: L-system road growth, planar street graphs and area extraction"
requires-python = ">=3.10"
dependencies = [
    "shapely",
]
keywords = ["procedural generation", "l-system", "street graph", "city", "road network"]
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
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["urbangen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
