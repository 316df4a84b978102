[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crabdrill"
version = "0.1.0"
description = "Drive a course of small Rust exercises: compile, test, lint and track progress from the terminal."
requires-python = ">=3.11"
keywords = ["rust", "exercises", "learning", "education", "teaching", "course"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]
dependencies = [
    "rich",
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
crabdrill = "crabdrill.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["crabdrill"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
