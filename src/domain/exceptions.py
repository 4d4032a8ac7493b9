"""
Domain exceptions - Semantic error kinds for the identity core.

Every failure that leaves the domain layer is one of these classes, so
callers classify failures with ``except``/``isinstance`` rather than by
inspecting messages. Underlying causes are chained via ``raise ... from``.
"""


class IdentityError(Exception):
    """Base class for identity domain errors."""

    pass


class ValidationFailed(IdentityError):
    """A request field violated a validation rule."""

    def __init__(self, field: str, rule: str) -> None:
        super().__init__(f"{field} field validation failed at {rule} tag")
        self.field = field
        self.rule = rule

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationFailed):
            return NotImplemented
        return (self.field, self.rule) == (other.field, other.rule)

    def __hash__(self) -> int:
        return hash((self.field, self.rule))


class UserNotFound(IdentityError):
    """No user exists for the given lookup key."""

    pass


class Unauthenticated(IdentityError):
    """Username/password is not correct, or the credential is not valid."""

    pass


class HashMismatch(IdentityError):
    """Plaintext does not match the stored hash."""

    pass


class InternalError(IdentityError):
    """Storage, hashing, signing or timeout failure."""

    pass
