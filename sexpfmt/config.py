"""Formatting configuration: skip table, arity fallback and indentation settings.

Config files are JSON:

    {
        "skip_table": {"my-macro": 1},
        "replace_skip_table": false,
        "arity": {"my-with-macro": 1},
        "indent": true,
        "indent_width": 2
    }

User skip entries are consulted before the defaults unless
`replace_skip_table` is set.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Union

from .skip_table import DEFAULT_SKIP_ENTRIES, SkipTable, default_arity
from .types import ArityLookup

DEFAULT_NEWLINE_THRESHOLD = 40


@dataclass
class FormatConfig:
    skip_table: SkipTable = field(default_factory=SkipTable)
    arity: Optional[ArityLookup] = default_arity
    # Declared for compatibility with existing config files; layout does not read it.
    newline_threshold: int = DEFAULT_NEWLINE_THRESHOLD
    indent: bool = False
    indent_width: int = 2

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FormatConfig":
        if not isinstance(data, dict):
            raise ValueError(f"config must be a JSON object, got {type(data).__name__}")

        entries = _skip_entries(data.get("skip_table", []))
        if not data.get("replace_skip_table", False):
            entries.extend(DEFAULT_SKIP_ENTRIES)

        arity: Optional[ArityLookup] = default_arity
        overrides = data.get("arity")
        if overrides:
            if not isinstance(overrides, dict):
                raise ValueError("arity must map symbol names to integers")
            for name, value in overrides.items():
                if not _is_count(value):
                    raise ValueError(f"arity for {name!r} must be a non-negative integer, got {value!r}")
            arity = _chained_arity(dict(overrides))

        newline_threshold = data.get("newline_threshold", DEFAULT_NEWLINE_THRESHOLD)
        if not _is_count(newline_threshold):
            raise ValueError(f"newline_threshold must be a non-negative integer, got {newline_threshold!r}")

        indent_width = data.get("indent_width", 2)
        if not _is_count(indent_width):
            raise ValueError(f"indent_width must be a non-negative integer, got {indent_width!r}")

        return cls(
            skip_table=SkipTable(entries),
            arity=arity,
            newline_threshold=newline_threshold,
            indent=bool(data.get("indent", False)),
            indent_width=indent_width,
        )


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _skip_entries(raw: Any) -> list[tuple[str, int]]:
    if isinstance(raw, dict):
        return list(raw.items())
    if isinstance(raw, list):
        entries = []
        for item in raw:
            if not isinstance(item, (list, tuple)) or len(item) != 2:
                raise ValueError(f"skip_table entries must be [name, count] pairs, got {item!r}")
            entries.append((item[0], item[1]))
        return entries
    raise ValueError("skip_table must be an object or a list of [name, count] pairs")


def _chained_arity(overrides: dict[str, int]) -> ArityLookup:
    def lookup(symbol_name: str) -> Optional[int]:
        if symbol_name in overrides:
            return overrides[symbol_name]
        return default_arity(symbol_name)

    return lookup


def load_config(path: Union[str, Path]) -> FormatConfig:
    """Read a JSON config file."""
    return FormatConfig.from_dict(json.loads(Path(path).read_text()))


def coerce_config(config: Union[FormatConfig, dict, None]) -> FormatConfig:
    if config is None:
        return FormatConfig()
    if isinstance(config, dict):
        return FormatConfig.from_dict(config)
    return config
