[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xtoproto"
version = "0.1.0"
description = "An s-expression reader with source spans, line and column positions, and protobuf string literal parsing"
requires-python = ">=3.10"
dependencies = []
keywords = ["s-expression", "reader", "parser", "text position", "protobuf", "string literal"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xtoproto"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
