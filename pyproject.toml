[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orcdecode"
version = "0.1.0"
description = "Decoders for the building blocks of ORC column data: run-length encodings, compressed stream blocks and schema types."
requires-python = ">=3.10"
keywords = ["orc", "columnar", "rle", "decoder", "file-format", "decompression"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: File Formats",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: System :: Archiving :: Compression",
]
dependencies = [
    "zstandard",
    "lz4",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["orcdecode"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
