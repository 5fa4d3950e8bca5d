[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "machlab"
version = "0.1.0"
description = "A Simple Machine simulator, a boundary-tag heap allocator and a set of data-structure exercises"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "simulator",
    "emulator",
    "simple-machine",
    "allocator",
    "heap",
    "linked-list",
    "binary-tree",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
machlab-sm = "machlab.simulator:main"
machlab-heapcheck = "machlab.heapcheck:main"
machlab-sort = "machlab.elements:main"
machlab-demo = "machlab.demo:main"
machlab-trunc = "machlab.trunc:main"
machlab-bintree = "machlab.bintree:main"
machlab-bubble = "machlab.exercises:sort_main"

[tool.hatch.build.targets.wheel]
packages = ["machlab"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
