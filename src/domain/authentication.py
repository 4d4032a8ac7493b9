"""
Authentication domain service - Verifies username/password pairs.

An unknown username and a wrong password both end in Unauthenticated.
Callers cannot tell the two apart, which prevents username enumeration.
Store or hashing faults are not credential verdicts and surface as
InternalError.
"""

import logging
from dataclasses import dataclass

from .exceptions import HashMismatch, IdentityError, InternalError, Unauthenticated, UserNotFound
from .ports import AuthenticationRequest, Comparator, User, UserGetterByUsername, Validator

logger = logging.getLogger(__name__)


@dataclass
class AuthenticationService:
    """Domain service for user authentication."""

    validator: Validator[AuthenticationRequest]
    users: UserGetterByUsername
    comparator: Comparator

    def authenticate_user(self, request: AuthenticationRequest) -> User:
        """
        Authenticate a user by username and password.

        Args:
            request: Username and plaintext password

        Returns:
            The stored user, unchanged

        Raises:
            ValidationFailed: If username or password is empty
            Unauthenticated: If the user does not exist or the password is wrong
            InternalError: If the store or the comparator fails
        """
        self.validator.validate(request)

        try:
            user = self.users.get_user_by_username(request.username)
        except UserNotFound:
            logger.warning("Authentication failed for %s", request.username)
            raise Unauthenticated() from None
        except IdentityError:
            raise
        except Exception as e:
            raise InternalError("getting user by username") from e

        try:
            self.comparator.compare(user.password, request.password)
        except HashMismatch:
            logger.warning("Authentication failed for %s", request.username)
            raise Unauthenticated() from None
        except IdentityError:
            raise
        except Exception as e:
            raise InternalError("comparing hashed with plain user password") from e

        logger.info("Authenticated user %s", user.username)
        return user
