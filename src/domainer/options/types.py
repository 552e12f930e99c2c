"""Option schema types - declared option types, specs, and value coercion."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import ConfigurationError

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})


class OptionType(str, Enum):
    """Value types an option may declare."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    LIST = "list"
    DICT = "dict"

    @classmethod
    def of(cls, value: Any) -> OptionType:
        """Infer the option type of a sample value."""
        # bool before int: bool is an int subclass
        if isinstance(value, bool):
            return cls.BOOL
        if isinstance(value, int):
            return cls.INT
        if isinstance(value, float):
            return cls.FLOAT
        if isinstance(value, str):
            return cls.STR
        if isinstance(value, (list, tuple)):
            return cls.LIST
        if isinstance(value, dict):
            return cls.DICT
        raise ConfigurationError(f"Unsupported option value type: {type(value).__name__}")


def _to_number(value: Any, kind: type) -> int | float:
    if isinstance(value, str):
        value = value.strip()
        if kind is int:
            value = float(value) if _looks_numeric(value) else 0
    elif isinstance(value, (list, tuple, dict, set)):
        value = 1 if value else 0
    elif not isinstance(value, (bool, int, float)):
        return kind(0)

    # Infinity and NaN have no integer value
    try:
        return kind(value)
    except (ValueError, OverflowError):
        return kind(0)


def _looks_numeric(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


def coerce(value: Any, option_type: OptionType) -> Any:
    """
    Coerce a persisted value to the declared option type.

    Mirrors loose scalar casting: numeric strings become numbers, common
    truthy strings become True, scalars wrap into single-item lists.
    """
    if option_type is OptionType.BOOL:
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)

    if option_type is OptionType.INT:
        return _to_number(value, int)

    if option_type is OptionType.FLOAT:
        return _to_number(value, float)

    if option_type is OptionType.STR:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "1" if value else ""
        return str(value)

    if option_type is OptionType.LIST:
        if value is None:
            return []
        if isinstance(value, list):
            return value
        if isinstance(value, (tuple, set, frozenset)):
            return list(value)
        if isinstance(value, dict):
            return list(value.values())
        return [value]

    if option_type is OptionType.DICT:
        if value is None:
            return {}
        if isinstance(value, dict):
            return value
        if isinstance(value, (list, tuple)):
            return dict(enumerate(value))
        return {0: value}

    raise ConfigurationError(f"Unknown option type: {option_type}")


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """
    A whitelisted option: its name, default value and declared type.

    If ``type`` is omitted it is taken from the default value.
    """
    name: str
    default: Any
    type: OptionType | None = None
    description: str = ""

    def __post_init__(self):
        declared = self.type or OptionType.of(self.default)
        if not isinstance(declared, OptionType):
            declared = OptionType(declared)
        object.__setattr__(self, "type", declared)
        if coerce(self.default, declared) != self.default:
            raise ConfigurationError(
                f"Default for option '{self.name}' is not a valid {declared.value}"
            )

    def coerce(self, value: Any) -> Any:
        """Coerce a value to this option's declared type."""
        return coerce(value, self.type)

    def fresh_default(self) -> Any:
        """Return a copy of the default safe to mutate."""
        return copy.deepcopy(self.default)
