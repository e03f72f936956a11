[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "sketchengine"
version = "0.1.0"
description = "A small entity-component game engine core: components, colliders, octree ray queries, fixed-rate systems, a headless renderer and message routing."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["game engine", "entity component system", "octree", "collision", "ray casting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["sketchengine*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
