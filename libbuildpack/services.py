"""Services bound to the application, read from ``CNB_SERVICES``."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import os

from libbuildpack.logger import Logger
from libbuildpack.platform import Platform

__all__ = ["Service", "default_services"]

_VARIABLE = "CNB_SERVICES"


def _lookup(data: Mapping[str, Any], key: str) -> Any:
    if key in data:
        return data[key]
    for name, value in data.items():
        if isinstance(name, str) and name.lower() == key:
            return value
    return None


def _string(data: Mapping[str, Any], key: str) -> str:
    value = _lookup(data, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


@dataclass
class Service:
    """A service bound to the application. Credentials hold sensitive values."""

    binding_name: str = ""
    credentials: dict[str, Any] = field(default_factory=dict)
    instance_name: str = ""
    label: str = ""
    plan: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Service:
        """Build a service from its decoded JSON object."""
        if not isinstance(data, Mapping):
            raise ValueError("a service must be a JSON object")
        credentials = _lookup(data, "credentials")
        if credentials is None:
            credentials = {}
        if not isinstance(credentials, Mapping):
            raise ValueError("credentials must be an object")
        tags = _lookup(data, "tags")
        if tags is None:
            tags = []
        if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
            raise ValueError("tags must be an array of strings")
        return cls(
            binding_name=_string(data, "binding_name"),
            credentials=dict(credentials),
            instance_name=_string(data, "instance_name"),
            label=_string(data, "label"),
            plan=_string(data, "plan"),
            tags=list(tags),
        )


def default_services(platform: Platform, logger: Logger) -> list[Service]:
    """Return the bound services from the environment, or else from the platform.

    ``CNB_SERVICES`` holds a JSON object mapping labels to arrays of services.
    Malformed content raises ValueError.
    """
    content = os.environ.get(_VARIABLE)
    if content is None:
        content = platform.environment_variables.get(_VARIABLE)
    if content is None:
        return []

    document = json.loads(content)
    if document is None:
        document = {}
    if not isinstance(document, Mapping):
        raise ValueError(f"{_VARIABLE} must be a JSON object")

    services = []
    for label, entries in document.items():
        if entries is None:
            continue
        if not isinstance(entries, list):
            raise ValueError(f"services of {label} must be an array")
        services.extend(
            Service() if entry is None else Service.from_dict(entry) for entry in entries
        )

    logger.debug("Services: %s", services)
    return services