"""
Password hashing - bcrypt implementation of the Hasher and Comparator ports.

bcrypt salts every hash with fresh randomness and compares in constant
time, so two hashes of the same password differ while both verify.
bcrypt only reads the first 72 bytes of its input; longer passwords are
refused by hash() and can therefore never match in compare().
"""

from dataclasses import dataclass

import bcrypt

from .exceptions import HashMismatch, InternalError

DEFAULT_COST = 10
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class BcryptHasher:
    """
    Hashes and compares passwords with bcrypt.

    The cost factor is fixed at construction; every hash embeds it, so
    compare() works across cost changes.
    """

    cost: int = DEFAULT_COST

    def hash(self, plain: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            InternalError: If bcrypt rejects the input or cost factor
        """
        try:
            return bcrypt.hashpw(plain.encode(), bcrypt.gensalt(rounds=self.cost)).decode()
        except ValueError as e:
            raise InternalError("generating bcrypt hash from password") from e

    def compare(self, hashed: str, plain: str) -> None:
        """
        Check a plaintext password against a stored hash.

        Raises:
            HashMismatch: If the password does not match
            InternalError: If the stored hash is malformed or bcrypt fails
        """
        password = plain.encode()
        if len(password) > MAX_PASSWORD_BYTES:
            raise HashMismatch()

        try:
            matched = bcrypt.checkpw(password, hashed.encode())
        except ValueError as e:
            raise InternalError("comparing bcrypt hash with plain") from e

        if not matched:
            raise HashMismatch()
