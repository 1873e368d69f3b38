[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dmenu"
version = "5.2"
description = "A terminal dynamic menu that reads items from standard input and prints the chosen one, plus a file-testing filter"
requires-python = ">=3.10"
dependencies = [
    "wcwidth",
]
keywords = ["menu", "launcher", "dmenu", "curses", "filter", "stest"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers :: Applets",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
dmenu = "dmenu.tui:main"
stest = "dmenu.stest:main"

[tool.hatch.build.targets.wheel]
packages = ["dmenu"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
