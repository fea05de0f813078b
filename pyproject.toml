[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bitmeter"
version = "0.7.6.1"
description = "Network traffic capture: records per-adapter download and upload byte counts into a compacting SQLite store"
requires-python = ">=3.10"
dependencies = []
keywords = ["bandwidth", "network", "traffic", "monitoring", "sqlite", "capture"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bitmeter-capture = "bitmeter.daemon:main"

[tool.hatch.build.targets.wheel]
packages = ["bitmeter"]

[tool.pytest.ini_options]
addopts = "-ra"
