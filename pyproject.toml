[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kbwatch"
version = "0.2.0"
description = "Watch USB devices being plugged in and unplugged and report changes to a Telegram chat"
requires-python = ">=3.10"
keywords = ["usb", "keyboard", "monitoring", "telegram", "notification"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]
dependencies = [
    "requests>=2.28",
    "platformdirs>=3.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "responses>=0.23",
]

[project.scripts]
kbwatch = "kbwatch.watcher:main"
kblist = "kbwatch.kblist:main"

[tool.hatch.build.targets.wheel]
packages = ["kbwatch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
