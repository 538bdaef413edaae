from __future__ import annotations

from typing import Any


class BaseType:
    """Base class of the value types; holds the raw value until it is validated."""

    def __init__(self, value: Any, tree_path: str = "/") -> None:
        self._value = value
        self._tree_path = tree_path

    def __str__(self) -> str:
        return str(self._value)

    def validate(self) -> None:
        raise NotImplementedError
