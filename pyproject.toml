[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "consoleview"
version = "0.1.0"
description = "Text-mode building blocks for an async task console: styles, duration formatting, controls, sortable table state, task lints and mini histograms."
requires-python = ">=3.10"
dependencies = []
keywords = ["console", "async", "tasks", "terminal", "histogram", "diagnostics"]
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
    "Topic :: Software Development :: Debuggers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
consoleview-dev = "consoleview.docs_images:main"

[tool.hatch.build.targets.wheel]
packages = ["consoleview"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
