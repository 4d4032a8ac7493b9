"""
Domain layer - Identity and credential core.

This package contains registration, authentication, validation, password
hashing and credential issuance. It defines its own port interfaces for
persistence and time, so adapters can be swapped without touching the
business rules.
"""

from .authentication import AuthenticationService
from .credentials import Credential, CredentialIssuer
from .exceptions import (
    HashMismatch,
    IdentityError,
    InternalError,
    Unauthenticated,
    UserNotFound,
    ValidationFailed,
)
from .hashing import BcryptHasher
from .ports import (
    AuthenticationRequest,
    Clock,
    Comparator,
    Hasher,
    Job,
    JobGetterByID,
    JobsListOptions,
    JobsLister,
    RegistrationRequest,
    User,
    UserGetterByUsername,
    UserRepository,
    UserStorer,
    Validator,
)
from .registration import RegistrationService
from .validation import ValidationAggregator, authentication_validator, registration_validator

__all__ = [
    "AuthenticationRequest",
    "AuthenticationService",
    "BcryptHasher",
    "Clock",
    "Comparator",
    "Credential",
    "CredentialIssuer",
    "HashMismatch",
    "Hasher",
    "IdentityError",
    "InternalError",
    "Job",
    "JobGetterByID",
    "JobsListOptions",
    "JobsLister",
    "RegistrationRequest",
    "RegistrationService",
    "Unauthenticated",
    "User",
    "UserGetterByUsername",
    "UserNotFound",
    "UserRepository",
    "UserStorer",
    "ValidationAggregator",
    "ValidationFailed",
    "Validator",
    "authentication_validator",
    "registration_validator",
]
