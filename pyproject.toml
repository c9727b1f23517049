[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "portalchess"
version = "0.1.0"
description = "A configurable chess variant with portals, custom pieces and a text console"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "board game", "portals", "variant", "console"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
portalchess = "portalchess.game:main"

[tool.hatch.build.targets.wheel]
packages = ["portalchess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
