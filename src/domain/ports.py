"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the data the identity core and the job catalog read
path work with, and the interfaces (ports) they require from
infrastructure. Adapters implement these protocols through structural
subtyping.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Protocol, TypeVar
from uuid import UUID

T_contra = TypeVar("T_contra", contravariant=True)


@dataclass
class User:
    """
    Identity record.

    An ``id`` of zero (or below) marks a user not yet persisted; the store
    assigns a positive id on first insert. ``password`` always holds a hash
    once the user has gone through registration.
    """

    username: str
    password: str = field(repr=False)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    id: int = 0


@dataclass(frozen=True)
class AuthenticationRequest:
    """Credentials supplied by a caller. Never persisted or logged."""

    username: str
    password: str

    def __repr__(self) -> str:
        return f"AuthenticationRequest(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class RegistrationRequest(AuthenticationRequest):
    """Authentication request plus a password confirmation."""

    password_confirmation: str = ""

    def __repr__(self) -> str:
        return f"RegistrationRequest(username={self.username!r}, password='***')"


@dataclass(frozen=True)
class Job:
    """Position listed by the external job catalog."""

    id: UUID
    company: str = ""
    company_url: str = ""
    company_logo: str = ""
    url: str = ""
    type: str = ""
    location: str = ""
    title: str = ""
    description: str = ""
    how_to_apply: str = ""
    created_at: str = ""


@dataclass(frozen=True)
class JobsListOptions:
    """
    Filters for a catalog listing.

    Empty strings, ``False`` and a page below 1 mean "not filtered" and
    are left out of the catalog query.
    """

    description: str = ""
    location: str = ""
    full_time: bool = False
    page: int = 0


class Validator(Protocol[T_contra]):
    """A single check over a typed request."""

    def validate(self, request: T_contra) -> None:
        """
        Validate the request.

        Raises:
            ValidationFailed: If the request violates the rule
            InternalError: If the check could not be performed
        """
        ...


class UserGetterByUsername(Protocol):
    """Port interface for looking up users."""

    def get_user_by_username(self, username: str) -> User:
        """
        Fetch a user by username.

        Raises:
            UserNotFound: If no user has this username
            InternalError: On any storage failure
        """
        ...


class UserStorer(Protocol):
    """Port interface for persisting users."""

    def store_user(self, user: User) -> None:
        """
        Insert or update a user.

        Inserts when ``user.id`` is non-positive and writes the assigned id
        back onto ``user``; otherwise updates the row with that id.

        Raises:
            ValidationFailed: If the username is taken (unique constraint)
            UserNotFound: If updating an id that has no stored user
            InternalError: On any other storage failure
        """
        ...


class UserRepository(UserGetterByUsername, UserStorer, Protocol):
    """Both store capabilities, as implemented by persistence adapters."""


class Hasher(Protocol):
    """One-way password hashing."""

    def hash(self, plain: str) -> str: ...


class Comparator(Protocol):
    """Hash comparison."""

    def compare(self, hashed: str, plain: str) -> None:
        """
        Raises:
            HashMismatch: If ``plain`` does not produce ``hashed``
            InternalError: If the comparison itself failed
        """
        ...


class Clock(Protocol):
    """Time source, injected so tests can pin the current instant."""

    def now(self) -> datetime: ...


class JobsLister(Protocol):
    """Port interface for browsing the job catalog."""

    def list_jobs(self, options: JobsListOptions) -> list[Job]:
        """
        Raises:
            InternalError: If the catalog could not be queried
        """
        ...


class JobGetterByID(Protocol):
    """Port interface for fetching one catalog position."""

    def get_job_by_id(self, job_id: str) -> Job:
        """
        Raises:
            ValidationFailed: If ``job_id`` is not a UUID (field ``job_id``, rule ``uuid``)
            InternalError: If the catalog could not be queried
        """
        ...
