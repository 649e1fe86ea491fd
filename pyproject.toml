[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ibccore"
version = "0.1.0"
description = "An in-memory model of IBC core handlers: host, clients, connections, packet sending and timeouts"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["ibc", "inter-blockchain", "blockchain", "light-client", "packets", "commitments"]
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
    "Topic :: System :: Distributed Computing",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ibccore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
