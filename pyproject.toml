[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "leafnote"
version = "0.8.19"
description = "Core of a simple text editor: charset and line-ending detection, file I/O, case-insensitive search and print pagination"
requires-python = ">=3.10"
dependencies = []
keywords = ["text editor", "encoding", "charset detection", "line endings", "search", "pagination"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["leafnote"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
