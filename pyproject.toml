[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rosenpass"
version = "0.1.0"
description = "Support code for a post-quantum key exchange: message layouts, KEM interface, endpoint discovery and key output"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cryptography",
    "key-exchange",
    "post-quantum",
    "wireguard",
    "kem",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rosenpass"]

[tool.hatch.build.targets.sdist]
include = [
    "rosenpass",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
