[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filesys"
version = "0.1.0"
description = "An interactive shell over a simulated in-memory file system with open handles and a line editor"
requires-python = ">=3.10"
keywords = ["filesystem", "simulation", "shell", "editor", "education"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Education",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
filesys = "filesys.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["filesys"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
