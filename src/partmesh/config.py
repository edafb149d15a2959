# -*- coding: utf-8 -*-
"""
Options controlling how each partition is numbered and labelled.
"""

from enum import Enum
from typing import Type, TypeVar, Union

_E = TypeVar("_E", bound=Enum)


class NodalOrdering(Enum):
    """Connectivity numbering of a partition: local ranks or global node ids."""

    LOCAL = "local"
    GLOBAL = "global"


class IndexingBase(Enum):
    """Whether written ids start at zero or one."""

    ZERO = 0
    ONE = 1


class DistributedMethod(Enum):
    """
    Interface coupling convention of the downstream solver.

    Only recorded in the output, it does not change how partitions are built.
    """

    NONE = "none"
    FETI = "feti"
    FETIDP = "fetidp"


def coerce_option(enum_type: Type[_E], value: Union[_E, str, int]) -> _E:
    """
    Converts a value or a name to a member of `enum_type`.

    Accepts a member, a member value (e.g. "local", 0) or a member name in any
    case (e.g. "GLOBAL").

    Raises:
        ValueError: If the value matches no member.
    """
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        for member in enum_type:
            if value.lower() in (member.name.lower(), str(member.value).lower()):
                return member
    else:
        try:
            return enum_type(value)
        except ValueError:
            pass
    choices = ", ".join(str(m.value) for m in enum_type)
    raise ValueError(f"Invalid {enum_type.__name__} '{value}', expected one of: {choices}")
