"""
Pipeline Handoff
================
Optional-safe readers for execution input.

An agent's input may be nothing, an arbitrary map, or a previous agent's
output. Values are looked up in `input["sharedData"]` first, then at the top
level of `input`. A missing, null or wrongly-typed value always means "use
the agent's default", never an error.
"""

from __future__ import annotations

from typing import Any, Mapping

from agent_core.app.schemas.execution import SHARED_DATA_KEY


def as_input_map(input: Any) -> Mapping[str, Any]:
    """The input as a map ({} for None or non-map values)."""
    return input if isinstance(input, Mapping) else {}


def shared_data(input: Any) -> Mapping[str, Any]:
    """The `sharedData` slice of the input, or {}."""
    value = as_input_map(input).get(SHARED_DATA_KEY)
    return value if isinstance(value, Mapping) else {}


def handoff_value(input: Any, key: str, default: Any = None) -> Any:
    """Look `key` up in sharedData, then top-level input, else `default`."""
    shared = shared_data(input)
    if shared.get(key) is not None:
        return shared[key]

    top_level = as_input_map(input)
    if top_level.get(key) is not None:
        return top_level[key]

    return default


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def handoff_number(input: Any, key: str, default: float | None = None) -> float | None:
    """A numeric handoff value, or `default` when absent or not a number."""
    value = handoff_value(input, key)
    return value if _is_number(value) else default


def handoff_list(input: Any, key: str) -> list[Any] | None:
    """A handoff value that is a non-empty list, else None."""
    value = handoff_value(input, key)
    if isinstance(value, list) and value:
        return value
    return None


def handoff_records(input: Any, *keys: str) -> list[dict[str, Any]] | None:
    """
    The first non-empty list of records found under `keys`.

    Non-map entries are dropped; None means no usable records were handed
    over and the caller should synthesize its own.
    """
    for key in keys:
        records = [dict(item) for item in handoff_list(input, key) or [] if isinstance(item, Mapping)]
        if records:
            return records
    return None


def handoff_strings(input: Any, *keys: str) -> list[str] | None:
    """The first non-empty list of strings found under `keys` (a bare string counts)."""
    for key in keys:
        value = handoff_value(input, key)
        if isinstance(value, str) and value.strip():
            return [value.strip()]
        strings = [
            item.strip()
            for item in handoff_list(input, key) or []
            if isinstance(item, str) and item.strip()
        ]
        if strings:
            return strings
    return None


def numeric_signals(input: Any) -> dict[str, float]:
    """Every numeric value the previous agent shared."""
    return {key: value for key, value in shared_data(input).items() if _is_number(value)}


__all__ = [
    "as_input_map",
    "shared_data",
    "handoff_value",
    "handoff_number",
    "handoff_list",
    "handoff_records",
    "handoff_strings",
    "numeric_signals",
]
