[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rcclib"
version = "0.1.0"
description = "printf-style formatting, byte-buffer and NUL-terminated string operations, coloured console logging and Sv39 page-table entry helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["printf", "formatting", "memset", "strings", "memory", "riscv", "sv39", "logging"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["rcclib"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
