[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aaccore"
version = "0.1.0"
description = "Core building blocks of an AAC encoder: configuration, sample-rate tables, TNS analysis and Huffman codebooks"
requires-python = ">=3.10"
dependencies = []
keywords = ["aac", "audio", "encoder", "tns", "huffman", "lpc"]
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
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["aaccore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
