[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lexkit"
version = "0.1.0"
description = "Byte-level lexing helpers: whitespace and entity handling, URL encoding, number conversion, a streaming JSON parser and an XML lexer."
requires-python = ">=3.10"
dependencies = []
keywords = ["lexer", "parser", "json", "xml", "tokenizer", "minify", "entities"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
    "Topic :: Text Processing :: Markup :: XML",
    "Topic :: File Formats :: JSON",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["lexkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
