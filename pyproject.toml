[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "floppyfs"
version = "0.1.0"
description = "Create, inspect and dump blocks of a small block-based floppy disk image file system"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "disk image", "superblock", "bitmap", "blocks"]
classifiers = [
    "Development Status :: 2 - Pre-Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
floppyfs = "floppyfs.cli:main"
floppyfs-tempinit = "floppyfs.tempinit:main"

[tool.hatch.build.targets.wheel]
packages = ["floppyfs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
