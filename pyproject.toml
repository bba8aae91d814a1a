[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sdplane"
version = "0.1.0"
description = "Control-plane building blocks: vectors, internal messages, debug flags, terminal mode, telnet negotiation parsing, packet summaries and PCIe TLP headers"
requires-python = ">=3.10"
dependencies = []
keywords = ["networking", "telnet", "tlp", "pcie", "debug", "packet", "termios"]
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
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sdplane"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
