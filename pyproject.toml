[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "marblerender"
version = "0.1.0"
description = "CPU software renderer and camera controllers for 2D physics marble-race snapshots"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["rendering", "physics", "2d", "rasterizer", "camera", "marble-race"]
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
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["marblerender"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
