"""Layers contributed by a buildpack: environment files, profile scripts and metadata."""

from __future__ import annotations

import dataclasses
import enum
import os
import tomllib
import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from libbuildpack.fsutil import file_exists, write_file, write_toml_file
from libbuildpack.logger import Logger

__all__ = ["Flag", "Process", "Slice", "LaunchMetadata", "Layer", "Layers"]

_PERM = 0o644


class Flag(enum.Enum):
    """Flags recorded in a layer's metadata file."""

    BUILD = 0
    CACHE = 1
    LAUNCH = 2


@dataclass
class Process:
    """A type of command that can be run; ``direct`` commands skip profile scripts."""

    type: str = ""
    command: str = ""
    direct: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "command": self.command, "direct": self.direct}


@dataclass
class Slice:
    """A slice of the application, given by its paths."""

    paths: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"paths": list(self.paths)}


@dataclass
class LaunchMetadata:
    """Processes and slices of the launched application."""

    processes: list[Process] = field(default_factory=list)
    slices: list[Slice] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "processes": [process.to_dict() for process in self.processes],
            "slices": [item.to_dict() for item in self.slices],
        }


def _render(format: str, args: tuple[Any, ...]) -> str:
    return format % args if args else format


def _plain(value: Any) -> Any:
    if value is None or isinstance(value, Mapping):
        return None if value is None else dict(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"metadata must be a mapping or a dataclass, not {type(value).__name__}")


@dataclass
class Layer:
    """A single layer: its directory and the path of its metadata file."""

    root: str
    metadata_path: str
    logger: Logger = field(default_factory=Logger, repr=False, compare=False)

    def _add_env_file(self, file: str, format: str, args: tuple[Any, ...]) -> None:
        path = os.path.join(self.root, file)
        content = _render(format, args)
        if self.logger.is_debug_enabled():
            self.logger.debug("Writing environment variable: %s <= %s", path, content)
        write_file(path, content, _PERM)

    def _build(self, file: str, format: str, args: tuple[Any, ...]) -> None:
        self._add_env_file(os.path.join("env.build", file), format, args)

    def _launch(self, file: str, format: str, args: tuple[Any, ...]) -> None:
        self._add_env_file(os.path.join("env.launch", file), format, args)

    def _shared(self, file: str, format: str, args: tuple[Any, ...]) -> None:
        self._add_env_file(os.path.join("env", file), format, args)

    def append_build_env(self, name: str, format: str, *args: Any) -> None:
        """Append to the variable at build time, without a delimiter."""
        self._build(f"{name}.append", format, args)

    def append_launch_env(self, name: str, format: str, *args: Any) -> None:
        """Append to the variable at launch time, without a delimiter."""
        self._launch(f"{name}.append", format, args)

    def append_shared_env(self, name: str, format: str, *args: Any) -> None:
        """Append to the variable at build and launch time, without a delimiter."""
        self._shared(f"{name}.append", format, args)

    def append_path_build_env(self, name: str, format: str, *args: Any) -> None:
        """Deprecated: use prepend_path_build_env."""
        warnings.warn("use prepend_path_build_env", DeprecationWarning, stacklevel=2)
        self.prepend_path_build_env(name, format, *args)

    def append_path_launch_env(self, name: str, format: str, *args: Any) -> None:
        """Deprecated: use prepend_path_launch_env."""
        warnings.warn("use prepend_path_launch_env", DeprecationWarning, stacklevel=2)
        self.prepend_path_launch_env(name, format, *args)

    def append_path_shared_env(self, name: str, format: str, *args: Any) -> None:
        """Deprecated: use prepend_path_shared_env."""
        warnings.warn("use prepend_path_shared_env", DeprecationWarning, stacklevel=2)
        self.prepend_path_shared_env(name, format, *args)

    def default_build_env(self, name: str, format: str, *args: Any) -> None:
        """Set a default for the variable at build time."""
        self._build(f"{name}.default", format, args)

    def default_launch_env(self, name: str, format: str, *args: Any) -> None:
        """Set a default for the variable at launch time."""
        self._launch(f"{name}.default", format, args)

    def default_shared_env(self, name: str, format: str, *args: Any) -> None:
        """Set a default for the variable at build and launch time."""
        self._shared(f"{name}.default", format, args)

    def delimiter_build_env(self, name: str, delimiter: str) -> None:
        """Set the delimiter for the variable at build time."""
        self._build(f"{name}.delim", delimiter, ())

    def delimiter_launch_env(self, name: str, delimiter: str) -> None:
        """Set the delimiter for the variable at launch time."""
        self._launch(f"{name}.delim", delimiter, ())

    def delimiter_shared_env(self, name: str, delimiter: str) -> None:
        """Set the delimiter for the variable at build and launch time."""
        self._shared(f"{name}.delim", delimiter, ())

    def override_build_env(self, name: str, format: str, *args: Any) -> None:
        """Override the variable at build time."""
        self._build(f"{name}.override", format, args)

    def override_launch_env(self, name: str, format: str, *args: Any) -> None:
        """Override the variable at launch time."""
        self._launch(f"{name}.override", format, args)

    def override_shared_env(self, name: str, format: str, *args: Any) -> None:
        """Override the variable at build and launch time."""
        self._shared(f"{name}.override", format, args)

    def prepend_build_env(self, name: str, format: str, *args: Any) -> None:
        """Prepend to the variable at build time, without a delimiter."""
        self._build(f"{name}.prepend", format, args)

    def prepend_launch_env(self, name: str, format: str, *args: Any) -> None:
        """Prepend to the variable at launch time, without a delimiter."""
        self._launch(f"{name}.prepend", format, args)

    def prepend_shared_env(self, name: str, format: str, *args: Any) -> None:
        """Prepend to the variable at build and launch time, without a delimiter."""
        self._shared(f"{name}.prepend", format, args)

    def prepend_path_build_env(self, name: str, format: str, *args: Any) -> None:
        """Prepend to the variable at build time using the OS path delimiter."""
        self._build(name, format, args)

    def prepend_path_launch_env(self, name: str, format: str, *args: Any) -> None:
        """Prepend to the variable at launch time using the OS path delimiter."""
        self._launch(name, format, args)

    def prepend_path_shared_env(self, name: str, format: str, *args: Any) -> None:
        """Prepend to the variable at build and launch time using the OS path delimiter."""
        self._shared(name, format, args)

    def read_metadata(self) -> dict[str, Any]:
        """Return the ``metadata`` table of the layer's metadata file, empty if there is none."""
        if not file_exists(self.metadata_path):
            self.logger.debug("Metadata %s does not exist", self.metadata_path)
            return {}
        with open(self.metadata_path, "rb") as handle:
            document = tomllib.load(handle)
        metadata = document.get("metadata", {})
        if not isinstance(metadata, Mapping):
            raise TypeError("metadata must be a table")
        result = dict(metadata)
        self.logger.debug("Reading layer metadata: %s => %s", self.metadata_path, result)
        return result

    def remove_metadata(self) -> None:
        """Remove the layer's metadata file if it exists."""
        if not file_exists(self.metadata_path):
            self.logger.debug("Metadata %s does not exist", self.metadata_path)
            return
        os.remove(self.metadata_path)

    def write_metadata(self, metadata: Any, *args: Flag) -> None:
        """Write ``metadata`` and the given flags to the layer's metadata file."""
        flags = set(args)
        for flag in flags:
            if not isinstance(flag, Flag):
                raise TypeError(f"not a layer flag: {flag!r}")
        document = {
            "build": Flag.BUILD in flags,
            "cache": Flag.CACHE in flags,
            "launch": Flag.LAUNCH in flags,
            "metadata": _plain(metadata),
        }
        self.logger.debug("Writing layer metadata: %s <= %r", self.metadata_path, document)
        write_toml_file(self.metadata_path, document, _PERM)

    def write_profile(self, file: str, format: str, *args: Any) -> None:
        """Write a script to the layer's ``profile.d`` directory."""
        path = os.path.join(self.root, "profile.d", file)
        content = _render(format, args)
        if self.logger.is_debug_enabled():
            self.logger.debug("Writing profile: %s <= %s", path, content)
        write_file(path, content, _PERM)


@dataclass
class Layers:
    """The directory holding all layers of an application."""

    root: str
    logger: Logger = field(default_factory=Logger, repr=False, compare=False)

    def layer(self, name: str) -> Layer:
        """Return the layer called ``name``."""
        return Layer(
            os.path.join(self.root, name),
            os.path.join(self.root, f"{name}.toml"),
            self.logger,
        )

    def write_application_metadata(self, metadata: LaunchMetadata) -> None:
        """Write the launch metadata to ``launch.toml``."""
        path = os.path.join(self.root, "launch.toml")
        self.logger.debug("Writing application metadata: %s <= %r", path, metadata)
        write_toml_file(path, metadata.to_dict(), _PERM)

    def write_persistent_metadata(self, metadata: Any) -> None:
        """Write ``metadata`` to ``store.toml``."""
        path = os.path.join(self.root, "store.toml")
        document = {"metadata": _plain(metadata)}
        self.logger.debug("Writing persistent metadata: %s <= %r", path, document)
        write_toml_file(path, document, _PERM)