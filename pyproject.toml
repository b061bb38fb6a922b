[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "giftbuyer"
version = "0.1.0"
description = "Building blocks for buying Telegram Star Gifts: invoices, payment, caches, result monitoring and logs"
requires-python = ">=3.10"
keywords = ["telegram", "star gifts", "invoices", "payments", "monitoring"]
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
    "Topic :: Communications :: Chat",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["giftbuyer"]

[tool.hatch.build.targets.sdist]
include = ["giftbuyer", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
