"""The build plan a buildpack contributes when detection passes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from libbuildpack.fsutil import argument, write_toml_file

__all__ = ["Provided", "Required", "Plan", "Plans", "default_writer"]


@dataclass
class Provided:
    """A dependency provided by a buildpack."""

    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}


@dataclass
class Required:
    """A dependency required by a buildpack; version and metadata are optional."""

    name: str = ""
    version: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.version:
            result["version"] = self.version
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result


@dataclass
class Plan:
    """What a buildpack provides and requires."""

    provides: list[Provided] = field(default_factory=list)
    requires: list[Required] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.provides:
            result["provides"] = [p.to_dict() for p in self.provides]
        if self.requires:
            result["requires"] = [r.to_dict() for r in self.requires]
        return result


@dataclass
class Plans:
    """A primary plan and optional alternative plans."""

    plan: Plan = field(default_factory=Plan)
    alternatives: list[Plan] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result = self.plan.to_dict()
        if self.alternatives:
            result["or"] = [alternative.to_dict() for alternative in self.alternatives]
        return result


def default_writer(index: int) -> Callable[[Plans], None]:
    """Return a writer that stores plans in the file named by command line argument ``index``."""

    def write(plans: Plans) -> None:
        write_toml_file(argument(index), plans.to_dict(), 0o644)

    return write