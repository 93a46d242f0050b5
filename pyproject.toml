[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cookiejars"
version = "0.1.0"
description = "Read cookies from the cookie stores of various web browsers and export them in Netscape format."
requires-python = ">=3.10"
keywords = [
    "cookies",
    "browser",
    "cookies.txt",
    "safari",
    "opera",
    "konqueror",
    "w3m",
    "elinks",
    "epiphany",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cookiejars = "cookiejars.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cookiejars"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
