"""Wire-format versions and typed accessors for script tables.

Scripts exchange plain Python values with the host: mappings act as records,
lists or tuples act as sequences.  The helpers below read one field out of such
a table and insist on its exact type.  Nothing is coerced; a mismatch raises
:class:`~game_integrations.exceptions.MarshalError` naming the offending field.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..exceptions import MarshalError

_MISSING = object()


class IntegrationStandard(str, Enum):
    """Closed set of wire-format versions an integration script may target."""

    V1 = "v1"

    @classmethod
    def from_str(cls, value: str) -> "IntegrationStandard":
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise MarshalError(f"Unsupported integration standard: {value!r}") from exc


def describe(value: Any) -> str:
    return type(value).__name__


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def require_table(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise MarshalError(f"{what} must be a table, got {describe(value)}")
    return value


def require_sequence(value: Any, what: str) -> Sequence[Any]:
    if not is_sequence(value):
        raise MarshalError(f"{what} must be a sequence, got {describe(value)}")
    return value


def _field(table: Mapping[str, Any], key: str, owner: str) -> Any:
    value = table.get(key, _MISSING)
    if value is _MISSING:
        raise MarshalError(f"{owner}.{key} is missing")
    return value


def get_str(table: Mapping[str, Any], key: str, owner: str) -> str:
    value = _field(table, key, owner)
    if not isinstance(value, str):
        raise MarshalError(f"{owner}.{key} must be a string, got {describe(value)}")
    return value


def get_optional_str(table: Mapping[str, Any], key: str, owner: str) -> Optional[str]:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MarshalError(f"{owner}.{key} must be a string or nil, got {describe(value)}")
    return value


def get_bool(table: Mapping[str, Any], key: str, owner: str) -> bool:
    value = _field(table, key, owner)
    if not isinstance(value, bool):
        raise MarshalError(f"{owner}.{key} must be a boolean, got {describe(value)}")
    return value


def get_int(table: Mapping[str, Any], key: str, owner: str) -> int:
    value = _field(table, key, owner)
    # bool is an int subclass; scripts returning true/false here are wrong.
    if isinstance(value, bool) or not isinstance(value, int):
        raise MarshalError(f"{owner}.{key} must be an integer, got {describe(value)}")
    return value


def get_table(table: Mapping[str, Any], key: str, owner: str) -> Mapping[str, Any]:
    return require_table(_field(table, key, owner), f"{owner}.{key}")


def get_str_list(table: Mapping[str, Any], key: str, owner: str) -> List[str]:
    values = require_sequence(_field(table, key, owner), f"{owner}.{key}")
    return [_check_str(item, f"{owner}.{key}[{index}]") for index, item in enumerate(values)]


def get_str_map(table: Mapping[str, Any], key: str, owner: str) -> Dict[str, str]:
    values = get_table(table, key, owner)
    result: Dict[str, str] = {}
    for name, value in values.items():
        _check_str(name, f"{owner}.{key} key")
        result[name] = _check_str(value, f"{owner}.{key}[{name!r}]")
    return result


def _check_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise MarshalError(f"{what} must be a string, got {describe(value)}")
    return value


__all__ = [
    "IntegrationStandard",
    "describe",
    "is_sequence",
    "require_table",
    "require_sequence",
    "get_str",
    "get_optional_str",
    "get_bool",
    "get_int",
    "get_table",
    "get_str_list",
    "get_str_map",
]
