[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "algokit"
version = "0.1.0"
description = "Small algorithms and process-coordination tools: a red-black dictionary, base conversion, prime counting, sorting, KMP search, job pipelines and a node network."
requires-python = ">=3.10"
keywords = [
    "red-black tree",
    "dictionary",
    "number systems",
    "sieve",
    "bitonic sort",
    "knuth-morris-pratt",
    "dag",
    "pipeline",
    "shared memory",
    "zeromq",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pyyaml",
    "pyzmq",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
algokit-dict = "algokit.rbtree:main"
algokit-convert = "algokit.number_systems:main"
algokit-sieve = "algokit.sieve:main"
algokit-dag = "algokit.dag:main"
algokit-mathlib = "algokit.mathlib:main"
algokit-divcalc = "algokit.divcalc:main"
algokit-shmcalc = "algokit.shmcalc:main"
algokit-bitonic = "algokit.bitonic:main"
algokit-controller = "algokit.topology:main"
algokit-node = "algokit.node:main"

[tool.hatch.build.targets.wheel]
packages = ["algokit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
