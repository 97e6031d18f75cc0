[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nftledger"
version = "0.1.0"
description = "Data model and in-memory block archive for ICRC-7/ICRC-37 style NFT ledgers"
requires-python = ">=3.10"
dependencies = []
keywords = ["nft", "ledger", "icrc-7", "icrc-37", "icrc-3", "archive", "blocks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["nftledger"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
