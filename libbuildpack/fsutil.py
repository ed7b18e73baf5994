"""Helpers for command line arguments and the file system."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from typing import Any

from libbuildpack.tomlwriter import dumps

__all__ = [
    "argument",
    "directory_contents",
    "file_exists",
    "write_file",
    "write_toml_file",
]


def argument(index: int) -> str:
    """Return the command line argument at ``index`` of ``sys.argv``."""
    if index < 0 or len(sys.argv) < index + 1:
        raise IndexError("incorrect number of command line arguments")
    return sys.argv[index]


def directory_contents(root: str | os.PathLike) -> list[str]:
    """Return the sorted paths, relative to ``root``, of everything below it, ``root`` itself as ``.``."""
    root = os.fspath(root)
    contents = ["."]
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, root)
        contents.extend(
            os.path.normpath(os.path.join(rel_dir, name)) for name in (*dirnames, *filenames)
        )
    return sorted(contents)


def file_exists(path: str | os.PathLike) -> bool:
    """Return whether ``path`` exists; errors other than absence are raised."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    return True


def _make_parents(filename: str) -> None:
    parent = os.path.dirname(filename)
    if parent:
        os.makedirs(parent, mode=0o755, exist_ok=True)


def write_file(filename: str | os.PathLike, content: str | bytes, perm: int = 0o644) -> None:
    """Write ``content`` to ``filename``, creating parent directories first."""
    filename = os.fspath(filename)
    _make_parents(filename)
    data = content.encode("utf-8") if isinstance(content, str) else bytes(content)
    fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
    with os.fdopen(fd, "wb") as out:
        out.write(data)


def write_toml_file(filename: str | os.PathLike, value: Mapping[str, Any], perm: int = 0o644) -> None:
    """Write the TOML form of ``value`` to ``filename``, creating parent directories first."""
    write_file(filename, dumps(value), perm)