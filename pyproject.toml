[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gllparse"
version = "0.1.0"
description = "A generalised LL (GLL) recogniser for context-free grammars, with a sentence generator and a test runner"
requires-python = ">=3.10"
dependencies = []
keywords = ["gll", "parser", "recogniser", "context-free grammar", "first", "follow", "gss"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
    "Topic :: Text Processing :: Linguistic",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gllparse = "gllparse.cli:main"
gllparse-gen = "gllparse.generator:main"
gllparse-test = "gllparse.runner:main"
gllparse-growth = "gllparse.runner:growth_main"

[tool.hatch.build.targets.wheel]
packages = ["gllparse"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
