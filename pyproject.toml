[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bwfs"
version = "0.1.0"
description = "A toy block filesystem stored as a folder of PBM image blocks, with mkfs, fsck and directory operations"
requires-python = ">=3.10"
dependencies = []
keywords = ["filesystem", "pbm", "inode", "bitmap", "mkfs", "fsck"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
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
mkfs-bwfs = "bwfs.mkfs:main"
fsck-bwfs = "bwfs.fsck:main"

[tool.hatch.build.targets.wheel]
packages = ["bwfs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
