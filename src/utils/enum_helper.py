"""Enum conversion utilities for configuration parsing"""

from enum import Enum
from typing import TypeVar, Type, Union, List

# Generic type for any Enum subclass
E = TypeVar("E", bound=Enum)


class EnumHelper:
    """
    Parse YAML values into enum members.

    Config files use lowercase names ("cross_fade", "virtual"); enums use
    upper case member names.
    """

    @staticmethod
    def from_string(enum_class: Type[E], value: Union[str, E]) -> E:
        """
        Case-insensitive lookup by member name.

        Raises:
            ValueError: no member with that name
        """
        if isinstance(value, enum_class):
            return value

        name = str(value).strip().upper()
        for member in enum_class:
            if member.name == name:
                return member

        raise ValueError(
            f"Invalid {enum_class.__name__} name: {value!r} "
            f"(expected one of {', '.join(EnumHelper.list_names(enum_class, lowercase=True))})"
        )

    @staticmethod
    def list_names(enum_class: Type[E], lowercase: bool = False) -> List[str]:
        names = [member.name for member in enum_class]
        return [n.lower() for n in names] if lowercase else names
