[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kcore"
version = "0.1.0"
description = "Touch tracking core: grayscale filter chain, size templates, touch events and headless control widgets"
requires-python = ">=3.10"
keywords = ["touch", "tracking", "image filters", "background subtraction", "templates", "widgets"]
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
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["kcore"]

[tool.pytest.ini_options]
addopts = "-ra"
