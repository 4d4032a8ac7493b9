"""
Registration domain service - Creates new identities.

Registration Flow
=================

1. Validate the request (fail-fast rule chain, username uniqueness last)
2. Hash the plaintext password
3. Stamp created_at/updated_at from the injected clock
4. Persist through the store port, which assigns the user id

Nothing is hashed or written until validation has passed.

Note: The uniqueness check and the insert are separate steps. Two
concurrent registrations of the same username can both pass validation;
the storage layer's unique constraint rejects the second insert, and the
adapter reports it as ValidationFailed("username", "unique").
"""

import logging
from dataclasses import dataclass

from .exceptions import IdentityError, InternalError
from .ports import Clock, Hasher, RegistrationRequest, User, UserStorer, Validator

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: validation, password hashing,
    timestamping and persistence.
    """

    validator: Validator[RegistrationRequest]
    clock: Clock
    hasher: Hasher
    users: UserStorer

    def register_user(self, request: RegistrationRequest) -> User:
        """
        Register a new user.

        Args:
            request: Username, password and password confirmation

        Returns:
            The persisted user, with a positive id and a hashed password

        Raises:
            ValidationFailed: If any rule is violated (first violation only)
            InternalError: If hashing or persistence fails
        """
        self.validator.validate(request)

        password_hash = self._hash_password(request.password)

        now = self.clock.now()
        user = User(
            username=request.username,
            password=password_hash,
            created_at=now,
            updated_at=now,
        )

        try:
            self.users.store_user(user)
        except IdentityError:
            raise
        except Exception as e:
            raise InternalError("storing user") from e

        logger.info("Registered user %s with id %d", user.username, user.id)
        return user

    def _hash_password(self, password: str) -> str:
        try:
            return self.hasher.hash(password)
        except InternalError:
            raise
        except Exception as e:
            raise InternalError("hashing plain user password") from e
