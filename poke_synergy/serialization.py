"""Convert result dataclasses into JSON-ready payloads."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Mapping


def to_payload(value: Any) -> Any:
    """Recursively turn dataclasses, enums and sets into plain JSON types.

    Enum members become their values and sets become sorted lists so that the
    output is stable between runs.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_payload(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {to_payload(key): to_payload(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(to_payload(item) for item in value)
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    return value
