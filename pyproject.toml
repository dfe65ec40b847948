[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stockroom"
version = "0.1.0"
description = "Repository and service layers for a warehouse inventory: products, product batches, sections, product price records and record reports."
requires-python = ">=3.10"
dependencies = []
keywords = ["warehouse", "inventory", "repository", "service", "sql", "db-api"]
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
    "Topic :: Office/Business",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stockroom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
