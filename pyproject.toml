[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lexkit"
version = "0.1.0"
description = "Building blocks for table-driven lexer generators: DFA tables, character partitions, UTF helpers, regex tokens and a C++ rule set"
requires-python = ">=3.10"
dependencies = []
keywords = ["lexer", "dfa", "regex", "tokeniser", "state machine", "utf-8", "utf-16"]
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
    "Topic :: Software Development :: Compilers",
    "Topic :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lexkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
