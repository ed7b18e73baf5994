"""Contributions made by the platform: its root directory and environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from libbuildpack.fsutil import directory_contents
from libbuildpack.logger import Logger

__all__ = ["EnvironmentVariables", "Platform", "default_platform"]


class EnvironmentVariables(dict[str, str]):
    """Environment variables provided by the platform, by name."""

    def set_all(self) -> None:
        """Set every variable in the environment of the current process."""
        for key, value in self.items():
            os.environ[key] = value


@dataclass
class Platform:
    """The platform's root directory and the environment variables it contributes."""

    root: str
    environment_variables: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    logger: Logger = field(default_factory=Logger, repr=False, compare=False)


def _env_files(directory: str) -> list[str]:
    try:
        names = os.listdir(directory)
    except (FileNotFoundError, NotADirectoryError):
        return []
    return sorted(os.path.join(directory, name) for name in names)


def _environment_variables(root: str, logger: Logger) -> EnvironmentVariables:
    variables = EnvironmentVariables()
    for path in _env_files(os.path.join(root, "env")):
        with open(path, "rb") as handle:
            variables[os.path.basename(path)] = handle.read().decode("utf-8")
    logger.debug("Platform environment variables: %s", variables)
    return variables


def default_platform(root: str | os.PathLike, logger: Logger) -> Platform:
    """Return the platform rooted at ``root``, reading the files of its ``env`` directory."""
    root = os.fspath(root)
    if logger.is_debug_enabled():
        logger.debug("Platform contents: %s", directory_contents(root))
    return Platform(root, _environment_variables(root, logger), logger)