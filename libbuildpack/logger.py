"""Console logging with separate debug and info streams."""

from __future__ import annotations

import os
import sys
from typing import Any, TextIO

from libbuildpack.fsutil import file_exists

__all__ = ["Logger", "default_logger"]


class Logger:
    """Writes debug and info lines to their streams; a missing stream disables that level."""

    def __init__(self, debug_stream: TextIO | None = None, info_stream: TextIO | None = None) -> None:
        self._debug = debug_stream
        self._info = info_stream

    def __repr__(self) -> str:
        return (
            f"Logger(debug_enabled={self.is_debug_enabled()}, "
            f"info_enabled={self.is_info_enabled()})"
        )

    @staticmethod
    def _emit(stream: TextIO, message: str, args: tuple[Any, ...]) -> None:
        text = message % args if args else message
        stream.write(f"{text}\n")
        stream.flush()

    def debug(self, message: str, *args: Any) -> None:
        """Write a %-formatted line to the debug stream, if enabled."""
        if self._debug is not None:
            self._emit(self._debug, message, args)

    def info(self, message: str, *args: Any) -> None:
        """Write a %-formatted line to the info stream, if enabled."""
        if self._info is not None:
            self._emit(self._info, message, args)

    def is_debug_enabled(self) -> bool:
        return self._debug is not None

    def is_info_enabled(self) -> bool:
        return self._info is not None


def default_logger(platform: str | os.PathLike) -> Logger:
    """Return a logger writing info to stdout, and debug to stderr only if BP_DEBUG is set.

    BP_DEBUG counts as set when it is in the environment or when the platform
    directory holds an ``env/BP_DEBUG`` file.
    """
    in_environment = "BP_DEBUG" in os.environ
    in_platform = file_exists(os.path.join(os.fspath(platform), "env", "BP_DEBUG"))
    if in_environment or in_platform:
        return Logger(sys.stderr, sys.stdout)
    return Logger(None, sys.stdout)