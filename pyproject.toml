[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flowguard"
version = "0.1.0"
description = "Serial-port flow monitor with a silence watchdog, reconnection, logging and an external classifier hook"
requires-python = ">=3.10"
dependencies = []
keywords = ["serial", "tty", "termios", "flow", "monitoring", "crc8", "logging"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Serial",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
flowguard = "flowguard.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["flowguard"]

[tool.pytest.ini_options]
addopts = "-ra"
