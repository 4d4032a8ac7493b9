"""
Request validation - Single-rule validators and their fail-fast aggregate.

Each rule is a small object checking one field of a request. Rules are
composed into a ValidationAggregator, which runs them in declaration order
and stops at the first violation, so the reported error is always the
first rule broken.

Registration rule order
=======================

    username  required
    username  min=3
    username  max=15
    username  alphanum
    password  required
    password  min=6
    password  max=72          (UTF-8 bytes, the bcrypt input limit)
    password  eqfield=password_confirmation
    username  unique          (store lookup, runs last)

Authentication rule order
=========================

    username  required
    password  required
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .exceptions import InternalError, UserNotFound, ValidationFailed
from .hashing import MAX_PASSWORD_BYTES
from .ports import (
    AuthenticationRequest,
    RegistrationRequest,
    UserGetterByUsername,
    Validator,
)

T = TypeVar("T")

_ALPHANUMERIC = re.compile(r"[A-Za-z0-9]+")


@dataclass(frozen=True)
class Required:
    """Field must be non-empty."""

    field: str

    def validate(self, request: Any) -> None:
        if not getattr(request, self.field):
            raise ValidationFailed(self.field, "required")


@dataclass(frozen=True)
class MinLength:
    """Field must hold at least ``length`` characters."""

    field: str
    length: int

    def validate(self, request: Any) -> None:
        if len(getattr(request, self.field)) < self.length:
            raise ValidationFailed(self.field, f"min={self.length}")


@dataclass(frozen=True)
class MaxLength:
    """Field must hold at most ``length`` characters."""

    field: str
    length: int

    def validate(self, request: Any) -> None:
        if len(getattr(request, self.field)) > self.length:
            raise ValidationFailed(self.field, f"max={self.length}")


@dataclass(frozen=True)
class MaxBytes:
    """Field must encode to at most ``length`` bytes of UTF-8."""

    field: str
    length: int

    def validate(self, request: Any) -> None:
        if len(getattr(request, self.field).encode()) > self.length:
            raise ValidationFailed(self.field, f"max={self.length}")


@dataclass(frozen=True)
class Alphanumeric:
    """Field must contain ASCII letters and digits only."""

    field: str

    def validate(self, request: Any) -> None:
        if not _ALPHANUMERIC.fullmatch(getattr(request, self.field)):
            raise ValidationFailed(self.field, "alphanum")


@dataclass(frozen=True)
class FieldsEqual:
    """Field must equal ``other``; the failure is reported on ``field``."""

    field: str
    other: str

    def validate(self, request: Any) -> None:
        if getattr(request, self.field) != getattr(request, self.other):
            raise ValidationFailed(self.field, f"eqfield={self.other}")


@dataclass(frozen=True)
class UsernameUniquenessValidator:
    """
    Username must not belong to an existing user.

    A UserNotFound from the store means the name is free. Any other
    store failure is not a verdict on the request and propagates as
    InternalError.
    """

    users: UserGetterByUsername

    def validate(self, request: RegistrationRequest) -> None:
        try:
            user = self.users.get_user_by_username(request.username)
        except UserNotFound:
            return
        except InternalError:
            raise
        except Exception as e:
            raise InternalError("getting user by username") from e

        if user.id > 0:
            raise ValidationFailed("username", "unique")


class ValidationAggregator(Generic[T]):
    """Runs validators in order, raising the first failure unmodified."""

    def __init__(self, validators: Sequence[Validator[T]]) -> None:
        if not validators:
            raise ValueError("ValidationAggregator needs at least one validator")
        self._validators = tuple(validators)

    def validate(self, request: T) -> None:
        for validator in self._validators:
            validator.validate(request)


def registration_validator(users: UserGetterByUsername) -> ValidationAggregator[RegistrationRequest]:
    """Build the registration rule chain, with the store lookup last."""
    return ValidationAggregator(
        [
            Required("username"),
            MinLength("username", 3),
            MaxLength("username", 15),
            Alphanumeric("username"),
            Required("password"),
            MinLength("password", 6),
            MaxBytes("password", MAX_PASSWORD_BYTES),
            FieldsEqual("password", "password_confirmation"),
            UsernameUniquenessValidator(users),
        ]
    )


def authentication_validator() -> ValidationAggregator[AuthenticationRequest]:
    """Build the authentication rule chain (emptiness checks only)."""
    return ValidationAggregator(
        [
            Required("username"),
            Required("password"),
        ]
    )
