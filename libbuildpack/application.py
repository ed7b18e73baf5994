"""The application being processed by buildpacks."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from libbuildpack.fsutil import directory_contents
from libbuildpack.logger import Logger

__all__ = ["Application", "default_application"]


@dataclass
class Application:
    """The application being processed; ``root`` is its root directory."""

    root: str
    logger: Logger = field(default_factory=Logger, repr=False, compare=False)


def default_application(logger: Logger) -> Application:
    """Return the application rooted at the current working directory."""
    root = os.getcwd()
    if logger.is_debug_enabled():
        logger.debug("Application contents: %s", directory_contents(root))
    return Application(root, logger)