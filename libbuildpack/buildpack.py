"""Metadata of a buildpack, read from its ``buildpack.toml``."""

from __future__ import annotations

import dataclasses
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from libbuildpack.fsutil import argument, file_exists
from libbuildpack.logger import Logger

__all__ = ["Info", "Stack", "Buildpack", "new_buildpack", "default_buildpack"]

_FILENAME = "buildpack.toml"


def _table(data: Mapping[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise TypeError(f"{key} must be a table")
    return dict(value)


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


def _strings(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypeError(f"{key} must be an array of strings")
    return list(value)


@dataclass
class Info:
    """Identity of the buildpack."""

    id: str = ""
    name: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Info:
        return cls(_string(data, "id"), _string(data, "name"), _string(data, "version"))


@dataclass
class Stack:
    """A stack the buildpack supports, with suggested build and run images."""

    id: str = ""
    build_images: list[str] = field(default_factory=list)
    run_images: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Stack:
        return cls(
            _string(data, "id"),
            _strings(data, "build-images"),
            _strings(data, "run-images"),
        )


@dataclass
class Buildpack:
    """The contents of a buildpack's ``buildpack.toml`` and its root directory."""

    info: Info = field(default_factory=Info)
    metadata: dict[str, Any] = field(default_factory=dict)
    root: str = ""
    stacks: list[Stack] = field(default_factory=list)
    logger: Logger = field(default_factory=Logger, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], root: str) -> Buildpack:
        """Build a buildpack from a parsed ``buildpack.toml`` document."""
        stacks = data.get("stacks", [])
        if not isinstance(stacks, list) or not all(isinstance(s, Mapping) for s in stacks):
            raise TypeError("stacks must be an array of tables")
        return cls(
            info=Info.from_dict(_table(data, "buildpack")),
            metadata=_table(data, "metadata"),
            root=root,
            stacks=[Stack.from_dict(stack) for stack in stacks],
        )


def _load(path: str, root: str, logger: Logger) -> Buildpack:
    with open(path, "rb") as handle:
        data = tomllib.load(handle)
    buildpack = dataclasses.replace(Buildpack.from_dict(data, root), logger=logger)
    logger.debug("Buildpack: %r", buildpack)
    return buildpack


def new_buildpack(root: str | os.PathLike, logger: Logger) -> Buildpack:
    """Return the buildpack described by ``buildpack.toml`` in ``root``."""
    root = os.fspath(root)
    path = os.path.join(root, _FILENAME)
    try:
        with open(path, "rb") as handle:
            content = handle.read()
    except OSError as err:
        raise FileNotFoundError(f"could not find buildpack.toml in the directory {root}") from err
    buildpack = dataclasses.replace(
        Buildpack.from_dict(tomllib.loads(content.decode("utf-8")), root), logger=logger
    )
    logger.debug("Buildpack: %r", buildpack)
    return buildpack


def _find_buildpack_toml() -> str:
    directory = os.path.abspath(os.path.dirname(argument(0)))
    while True:
        if os.path.dirname(directory) == directory:
            raise FileNotFoundError("could not find buildpack.toml in the directory hierarchy")
        candidate = os.path.join(directory, _FILENAME)
        if file_exists(candidate):
            return candidate
        directory = os.path.abspath(os.path.join(directory, ".."))


def default_buildpack(logger: Logger) -> Buildpack:
    """Return the buildpack whose ``buildpack.toml`` lies above the running program."""
    path = _find_buildpack_toml()
    return _load(path, os.path.dirname(path), logger)