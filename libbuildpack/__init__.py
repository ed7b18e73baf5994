"""Building blocks for writing buildpacks: metadata, build plans, layers, platform, services and stack."""

__version__ = "1.0.0"

__all__ = [
    "application",
    "buildpack",
    "buildpackplan",
    "buildplan",
    "detect",
    "fsutil",
    "layers",
    "logger",
    "platform",
    "services",
    "stack",
    "tomlwriter",
]