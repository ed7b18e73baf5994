"""Serialisation of plain Python data to TOML documents.

Plain values of a mapping come first, then its sub-tables and arrays of
tables, in insertion order. Nested tables are indented by two spaces per
level, and ``None`` values are left out.
"""

from __future__ import annotations

import datetime as _dt
import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

__all__ = ["dumps"]

_INDENT = "  "
_BARE_KEY = re.compile(r"[A-Za-z0-9_-]+")
_ESCAPES = {
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
    '"': '\\"',
    "\\": "\\\\",
}


def _quote(text: str) -> str:
    escaped = []
    for ch in text:
        if ch in _ESCAPES:
            escaped.append(_ESCAPES[ch])
        elif ch < " " or ch == "\x7f":
            escaped.append(f"\\u{ord(ch):04x}")
        else:
            escaped.append(ch)
    return '"' + "".join(escaped) + '"'


def _key(part: str) -> str:
    return part if _BARE_KEY.fullmatch(part) else _quote(part)


def _indent(key: tuple[str, ...]) -> str:
    return _INDENT * (len(key) - 1)


def _is_table(value: Any) -> bool:
    return isinstance(value, Mapping)


def _is_table_array(value: Any) -> bool:
    if not isinstance(value, (list, tuple)):
        return False
    items = [item for item in value if item is not None]
    tables = sum(isinstance(item, Mapping) for item in items)
    if tables == 0:
        return False
    if tables != len(items):
        raise TypeError("an array cannot mix tables and other values")
    return True


def _kind(value: Any) -> str:
    if value is None:
        raise TypeError("arrays cannot contain None")
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, _dt.datetime):
        return "datetime"
    if isinstance(value, _dt.date):
        return "date"
    if isinstance(value, _dt.time):
        return "time"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        raise TypeError("inline tables are not supported")
    raise TypeError(f"unsupported type for TOML: {type(value).__name__}")


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = format(Decimal(repr(float(value))), "f")
    return text if "." in text else text + ".0"


def _format_datetime(value: _dt.datetime) -> str:
    if value.tzinfo is None:
        return value.isoformat()
    utc = value.astimezone(_dt.timezone.utc)
    return utc.replace(tzinfo=None, microsecond=0).isoformat() + "Z"


def _format(value: Any) -> str:
    kind = _kind(value)
    if kind == "boolean":
        return "true" if value else "false"
    if kind == "integer":
        return str(int(value))
    if kind == "float":
        return _format_float(value)
    if kind == "string":
        return _quote(value)
    if kind == "datetime":
        return _format_datetime(value)
    if kind == "date":
        return value.isoformat()
    if kind == "time":
        return value.replace(tzinfo=None).isoformat()
    kinds = {_kind(item) for item in value}
    if len(kinds) > 1:
        raise TypeError("an array cannot mix values of different types")
    return "[" + ", ".join(_format(item) for item in value) + "]"


class _Encoder:
    def __init__(self) -> None:
        self._parts: list[str] = []

    def text(self) -> str:
        return "".join(self._parts)

    def _write(self, text: str) -> None:
        self._parts.append(text)

    def _newline(self) -> None:
        if self._parts:
            self._write("\n")

    def body(self, key: tuple[str, ...], mapping: Mapping) -> None:
        direct = []
        nested = []
        for name, value in mapping.items():
            if not isinstance(name, str):
                raise TypeError(f"TOML keys must be strings, not {type(name).__name__}")
            if value is None:
                continue
            if _is_table(value) or _is_table_array(value):
                nested.append((name, value))
            else:
                direct.append((name, value))

        for name, value in direct:
            full = key + (name,)
            self._write(f"{_indent(full)}{_key(name)} = {_format(value)}")
            self._newline()

        for name, value in nested:
            full = key + (name,)
            if _is_table(value):
                self.table(full, value)
            else:
                self.table_array(full, value)

    def table(self, key: tuple[str, ...], mapping: Mapping) -> None:
        if len(key) == 1:
            self._newline()
        self._write(f"{_indent(key)}[{'.'.join(_key(part) for part in key)}]")
        self._newline()
        self.body(key, mapping)

    def table_array(self, key: tuple[str, ...], items: list | tuple) -> None:
        header = ".".join(_key(part) for part in key)
        for item in items:
            if item is None:
                continue
            self._newline()
            self._write(f"{_indent(key)}[[{header}]]")
            self._newline()
            self.body(key, item)


def dumps(value: Mapping) -> str:
    """Return the TOML document for a mapping."""
    if not isinstance(value, Mapping):
        raise TypeError(f"a TOML document must be a mapping, not {type(value).__name__}")
    encoder = _Encoder()
    encoder.body((), value)
    return encoder.text()