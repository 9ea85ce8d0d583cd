[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "factori"
version = "0.1.0"
description = "A small top-down factory sandbox with procedurally generated chunked terrain"
requires-python = ">=3.10"
keywords = ["game", "sandbox", "perlin-noise", "procedural-generation", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
factori = "factori.app:main"

[tool.hatch.build.targets.wheel]
packages = ["factori"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
