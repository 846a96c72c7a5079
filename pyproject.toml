[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "textos"
version = "0.1.0"
description = "A simulated text-mode machine: VGA-style screen, RAM file system, heap allocator and a small interactive shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["vga", "text-mode", "shell", "ramfs", "allocator", "simulation", "emulator"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
textos = "textos.console:main"

[tool.hatch.build.targets.wheel]
packages = ["textos"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
