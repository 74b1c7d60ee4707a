"""Shared validation helpers for frozen dataclass models.

Private module -- not part of the public API. Used exclusively by
``__post_init__`` methods in sibling model modules to enforce runtime
type constraints and null-byte safety.
"""

from __future__ import annotations

from typing import Any


def validate_str_no_null(value: Any, name: str) -> None:
    """Raise if *value* is not a ``str`` or contains null bytes."""
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")
    if "\x00" in value:
        raise ValueError(f"{name} contains null bytes")


def validate_str_not_empty(value: Any, name: str) -> None:
    """Raise if *value* is not a non-empty ``str`` without null bytes."""
    validate_str_no_null(value, name)
    if not value.strip():
        raise ValueError(f"{name} must not be empty")


def validate_optional_str(value: Any, name: str) -> None:
    """Raise if *value* is neither ``None`` nor a ``str`` without null bytes."""
    if value is not None:
        validate_str_no_null(value, name)
