[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "uidkit"
version = "0.1.0"
description = "Generate, parse and inspect UUIDs of versions 1 to 7, with SQL and JSON helpers."
requires-python = ">=3.10"
dependencies = [
    "psutil",
]
keywords = ["uuid", "guid", "identifier", "rfc9562", "uuidv7", "uuidv6"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["uidkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
