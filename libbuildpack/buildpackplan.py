"""The buildpack plan handed to a buildpack at build time."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from libbuildpack.fsutil import argument, write_toml_file
from libbuildpack.logger import Logger

__all__ = ["Plan", "Plans", "default_plans", "default_writer"]


def _string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string")
    return value


@dataclass
class Plan:
    """One entry of a buildpack plan; version and metadata are optional."""

    name: str = ""
    version: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Plan:
        metadata = data.get("metadata", {})
        if not isinstance(metadata, Mapping):
            raise TypeError("metadata must be a table")
        return cls(_string(data, "name"), _string(data, "version"), dict(metadata))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.version:
            result["version"] = self.version
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


@dataclass
class Plans:
    """All entries of a buildpack plan."""

    entries: list[Plan] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Plans:
        entries = data.get("entries", [])
        if not isinstance(entries, list) or not all(isinstance(e, Mapping) for e in entries):
            raise TypeError("entries must be an array of tables")
        return cls([Plan.from_dict(entry) for entry in entries])

    def to_dict(self) -> dict[str, Any]:
        if not self.entries:
            return {}
        return {"entries": [entry.to_dict() for entry in self.entries]}


def default_plans(path: str | os.PathLike, logger: Logger) -> Plans:
    """Read the plans from the TOML file at ``path``."""
    with open(path, "rb") as handle:
        plans = Plans.from_dict(tomllib.load(handle))
    logger.debug("Plans: %r", plans)
    return plans


def default_writer(index: int) -> Callable[[Plans], None]:
    """Return a writer that stores plans in the file named by command line argument ``index``."""

    def write(plans: Plans) -> None:
        write_toml_file(argument(index), plans.to_dict(), 0o644)

    return write