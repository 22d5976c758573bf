"""
A small typed walker over decoded JSON values.

Every step remembers where it came from, so a failure deep inside a nested
renderer reports the whole path (``videoRenderer.thumbnail.thumbnails[0].url``)
instead of only the last key.
"""

from typing import Any, Optional

from yt_provider.exceptions import MissingFieldError


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


class JsonNode:
    """A JSON value paired with the path used to reach it."""

    __slots__ = ("value", "path")

    def __init__(self, value: Any, path: str = ""):
        self.value = value
        self.path = path

    def _child_path(self, key: str) -> str:
        return f"{self.path}.{key}" if self.path else key

    def has(self, key: str) -> bool:
        return isinstance(self.value, dict) and key in self.value

    def get(self, key: str) -> Optional["JsonNode"]:
        """Returns the child under ``key`` or None when it is absent."""
        if not self.has(key):
            return None
        return JsonNode(self.value[key], self._child_path(key))

    def read(self, key: str) -> "JsonNode":
        """Returns the child under ``key``, raising if it is absent."""
        path = self._child_path(key)
        if not isinstance(self.value, dict):
            raise MissingFieldError(
                path, f"unreachable ({self.path or 'root'} is {_type_name(self.value)})"
            )
        if key not in self.value:
            raise MissingFieldError(path)
        return JsonNode(self.value[key], path)

    def index(self, position: int) -> "JsonNode":
        """Returns the array element at ``position``, raising if out of range."""
        path = f"{self.path}[{position}]"
        items = self.as_list()
        if position >= len(items) or position < -len(items):
            raise MissingFieldError(path)
        return JsonNode(items[position], path)

    def as_list(self) -> list[Any]:
        if not isinstance(self.value, list):
            raise MissingFieldError(
                self.path, f"not an array (got {_type_name(self.value)})"
            )
        return self.value

    def as_str(self, allow_empty: bool = False) -> str:
        if not isinstance(self.value, str):
            raise MissingFieldError(
                self.path, f"not a string (got {_type_name(self.value)})"
            )
        if not allow_empty and not self.value.strip():
            raise MissingFieldError(self.path, "empty")
        return self.value

    def items(self) -> list["JsonNode"]:
        """Wraps every element of an array node with its indexed path."""
        return [
            JsonNode(item, f"{self.path}[{i}]") for i, item in enumerate(self.as_list())
        ]

    def __repr__(self) -> str:
        return f"JsonNode(path={self.path!r}, type={_type_name(self.value)})"
