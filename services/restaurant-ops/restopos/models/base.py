"""
Restaurant Ops — Shared model base

Entities are immutable snapshots: the store swaps whole instances on
every write, so a reader never sees a half-applied change.
"""
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from restopos.core.errors import ValidationError

E = TypeVar("E", bound=Enum)


class Entity(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


def coerce(enum_cls: type[E], value: Any) -> E:
    """Turn a raw status/role value into its enum member or raise ValidationError."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [member.value for member in enum_cls]
        raise ValidationError(f"{value!r} is not a valid {enum_cls.__name__}; expected one of {allowed}")
