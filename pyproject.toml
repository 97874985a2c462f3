[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nestkit"
version = "0.1.0"
description = "Transport-independent building blocks for a small HTTP server: incremental HTTP/1.x parsing, request and response building, send-state tracking, rotating file logs, periodic tasks and JSON configuration."
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "parser", "server", "logging", "log-rotation", "chunked"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nestkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
