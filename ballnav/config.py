"""Typed access to the JSON configuration that tunes navigation."""

from __future__ import annotations

import json
from os import PathLike
from typing import Any


class Config:
    """A set of named settings with typed lookups."""

    def __init__(self, values: dict[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def _lookup(self, key: str) -> Any:
        try:
            return self._values[key]
        except KeyError:
            raise KeyError(f"missing configuration key: {key!r}") from None

    def get_int(self, key: str) -> int:
        """Return the integer setting ``key``."""
        value = self._lookup(key)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"configuration key {key!r} is not an integer: {value!r}")
        return value

    def get_bool(self, key: str) -> bool:
        """Return the boolean setting ``key``."""
        value = self._lookup(key)
        if not isinstance(value, bool):
            raise TypeError(f"configuration key {key!r} is not a boolean: {value!r}")
        return value

    def get_str(self, key: str) -> str:
        """Return the string setting ``key``."""
        value = self._lookup(key)
        if not isinstance(value, str):
            raise TypeError(f"configuration key {key!r} is not a string: {value!r}")
        return value

    def set(self, key: str, value: Any) -> None:
        """Set or replace the setting ``key``."""
        self._values[key] = value


def load_config(path: str | PathLike[str]) -> Config:
    """Read a JSON object from ``path`` and wrap it in a :class:`Config`."""
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    if not isinstance(data, dict):
        raise ValueError(f"configuration file {path!s} does not hold a JSON object")
    return Config(data)