"""Flat, dotted-key settings lookup.

Account configuration arrives as nested JSON (or any nested mapping) and is
flattened into dotted keys, e.g. ``{"account": {"ops": {"url": "..."}}}``
becomes ``account.ops.url``. Leaf values are stored as strings, lists of
scalars as lists of strings.
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, ClassVar

SettingValue = str | list[str]


class SettingsError(Exception):
    """Raised when configuration is missing or invalid."""


def _to_setting_str(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(prefix: str, value: object, out: dict[str, SettingValue]) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            child_key = f"{prefix}.{key}" if prefix else str(key)
            _flatten(child_key, child, out)
        return
    if not prefix:
        raise SettingsError("settings root must be a mapping")
    if isinstance(value, list | tuple):
        items: list[str] = []
        for item in value:
            if isinstance(item, Mapping | list | tuple):
                raise SettingsError(f"unsupported nested value in list setting [{prefix}]")
            if item is not None:
                items.append(_to_setting_str(item))
        out[prefix] = items
        return
    out[prefix] = _to_setting_str(value)


class Settings(Mapping[str, SettingValue]):
    """Immutable mapping of dotted keys to setting values."""

    EMPTY: ClassVar[Settings]

    def __init__(self, values: Mapping[str, SettingValue] | None = None) -> None:
        self._values: dict[str, SettingValue] = dict(values or {})

    @classmethod
    def from_mapping(cls, nested: Mapping[str, Any]) -> Settings:
        """Flatten a nested mapping into dotted keys."""

        out: dict[str, SettingValue] = {}
        _flatten("", nested, out)
        return cls(out)

    @classmethod
    def from_json_file(cls, path: Path) -> Settings:
        """Load settings from a JSON object file."""

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise SettingsError(f"settings file not found [{path}]") from e
        except json.JSONDecodeError as e:
            raise SettingsError(f"settings file is not valid JSON [{path}]: {e}") from e

        if not isinstance(raw, dict):
            raise SettingsError(f"settings file must contain a JSON object [{path}]")
        return cls.from_mapping(raw)

    def __getitem__(self, key: str) -> SettingValue:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Settings({sorted(self._values)!r})"

    def get_as_bool(self, key: str, default: bool) -> bool:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, str):
            normalized = value.strip()
            if normalized == "true":
                return True
            if normalized == "false":
                return False
        raise SettingsError(
            f"failed to parse value [{value}] as only [true] or [false] are allowed for [{key}]"
        )

    def get_as_int(self, key: str, default: int | None = None) -> int | None:
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise SettingsError(f"failed to parse value [{value}] as an integer for [{key}]")

    def get_by_prefix(self, prefix: str) -> Settings:
        """Return the settings nested under ``prefix`` with the prefix stripped."""

        if not prefix.endswith("."):
            prefix = prefix + "."
        return Settings(
            {key[len(prefix) :]: value for key, value in self._values.items() if key.startswith(prefix)}
        )

    def get_groups(self, prefix: str) -> dict[str, Settings]:
        """Group the settings under ``prefix`` by their first key segment.

        Group order follows the order in which keys were first seen.
        """

        scoped = self.get_by_prefix(prefix)
        groups: dict[str, Settings] = {}
        for key in scoped:
            name = key.split(".", 1)[0]
            if name and name not in groups:
                groups[name] = scoped.get_by_prefix(name)
        return groups

    def as_nested_dict(self) -> dict[str, Any]:
        """Rebuild nested dicts from the dotted keys."""

        nested: dict[str, Any] = {}
        for key, value in self._values.items():
            parts = key.split(".")
            node = nested
            for part in parts[:-1]:
                child = node.get(part)
                if not isinstance(child, dict):
                    child = {}
                    node[part] = child
                node = child
            node[parts[-1]] = list(value) if isinstance(value, list) else value
        return nested


Settings.EMPTY = Settings()
