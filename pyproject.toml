[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ramos"
version = "0.1.0"
description = "A small teaching shell with text utilities, process tools and an MVar demo, running on an in-memory console"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "education", "pipes", "semaphores", "printf", "bitmap-font"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ramos = "ramos.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["ramos"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
