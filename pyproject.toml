[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sigindex"
version = "0.1.0"
description = "Signature-indexed relation files with tuple, page and bit-sliced signatures"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "database",
    "signature file",
    "superimposed codeword",
    "bit-sliced index",
    "partial match",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sigindex-create = "sigindex.cli:create_main"
sigindex-insert = "sigindex.cli:insert_main"
sigindex-select = "sigindex.cli:select_main"
sigindex-stats = "sigindex.cli:stats_main"
sigindex-dump = "sigindex.cli:dump_main"
sigindex-gendata = "sigindex.gendata:main"

[tool.hatch.build.targets.wheel]
packages = ["sigindex"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
