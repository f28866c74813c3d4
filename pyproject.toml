[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "changecraft"
version = "0.1.0"
description = "Create and render structured changelog entries kept as individual YAML files"
requires-python = ">=3.10"
keywords = ["changelog", "release-notes", "conventional-commits", "yaml", "markdown"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Documentation",
]
dependencies = [
    "pyyaml",
    "jinja2",
    "python-slugify",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
changelog = "changecraft.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["changecraft"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
