[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plexaubnet"
version = "0.1.0"
description = "CIDR overlap detection and network boundary helpers, plus envtest asset setup for controller tests"
requires-python = ">=3.10"
dependencies = []
keywords = ["cidr", "ipam", "subnet", "ipv4", "ipv6", "envtest", "kubernetes"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["plexaubnet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
