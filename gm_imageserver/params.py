"""Typed, read-only parameter bag."""

from __future__ import annotations

from typing import Any, Iterator, Mapping

from .errors import ParamError


class Params(Mapping[str, Any]):
    """Named request values with typed accessors.

    Accessors raise :class:`ParamError` naming the key when it is missing or
    holds a value of the wrong type. Nested mappings are returned as
    :class:`Params` by :meth:`get_params`.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})

    def __getitem__(self, name: str) -> Any:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Params({self._values!r})"

    def has(self, name: str) -> bool:
        return name in self._values

    def empty(self) -> bool:
        return not self._values

    def _get(self, name: str) -> Any:
        if name not in self._values:
            raise ParamError(name, "not set")
        return self._values[name]

    def get_string(self, name: str) -> str:
        value = self._get(name)
        if not isinstance(value, str):
            raise ParamError(name, "not a string")
        return value

    def get_int(self, name: str) -> int:
        value = self._get(name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ParamError(name, "not an int")
        return value

    def get_bool(self, name: str) -> bool:
        value = self._get(name)
        if not isinstance(value, bool):
            raise ParamError(name, "not a bool")
        return value

    def get_params(self, name: str) -> "Params":
        value = self._get(name)
        if isinstance(value, Params):
            return value
        if isinstance(value, Mapping):
            return Params(value)
        raise ParamError(name, "not a Params")
