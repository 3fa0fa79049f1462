[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "workflow"
version = "0.1.0"
description = "Workflow data model, SQL helpers, form rendering and a small expression/template toolkit"
requires-python = ">=3.10"
dependencies = []
keywords = ["workflow", "bpm", "forms", "templates", "sql"]
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
    "Topic :: Office/Business :: Groupware",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["workflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
