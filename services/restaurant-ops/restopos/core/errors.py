"""
Restaurant Ops — Domain errors

Every failure raised by the core is synchronous and leaves the store
untouched. The HTTP layer maps each class to a status code.
"""
from typing import Any, Iterable


class RestaurantError(Exception):
    """Base class for every error the core raises on purpose."""


class ValidationError(RestaurantError):
    """Malformed input or a write that would break an entity invariant."""


class AuthorizationError(RestaurantError):
    """The caller's role is not among the roles the operation permits."""

    def __init__(self, operation: str, required: Iterable[str], actual: str | None):
        self.operation = operation
        self.required = tuple(sorted(required))
        self.actual = actual
        super().__init__(
            f"'{operation}' requires one of {list(self.required)}; caller role is {actual!r}"
        )


class InvalidTransitionError(RestaurantError):
    """A state-machine edge that is not allowed from the current state."""

    def __init__(self, entity: str, current: str, requested: str):
        self.entity = entity
        self.current = current
        self.requested = requested
        super().__init__(f"{entity} cannot move from '{current}' to '{requested}'")


class NotFoundError(RestaurantError):
    def __init__(self, kind: str, key: Any):
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} {key!r} not found")
