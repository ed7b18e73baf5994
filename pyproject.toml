[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "libbuildpack"
version = "1.0.0"
description = "Building blocks for writing buildpacks: buildpack metadata, build plans, layers, platform, services and stack."
requires-python = ">=3.11"
dependencies = []
keywords = ["buildpack", "cloud-native", "build-plan", "layers", "toml", "containers"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["libbuildpack"]

[tool.hatch.build.targets.sdist]
include = ["libbuildpack", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
