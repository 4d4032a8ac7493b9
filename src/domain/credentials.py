"""
Credential issuance - Signed, time-bounded bearer tokens for identities.

Tokens are HS512 JWTs carrying:

- sub: user id (stringified)
- iss: configured service URL
- iat: issuance time from the injected clock
- exp: iat + configured lifetime

Nothing is stored server-side. A structurally valid, correctly signed,
unexpired token is the whole trust model; there is no revocation.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from .exceptions import InternalError, Unauthenticated
from .ports import Clock, User

ALGORITHM = "HS512"


@dataclass(frozen=True)
class Credential:
    """Issued access token and its expiry."""

    access_token: str
    expires_at: datetime
    expires_in: int

    def __repr__(self) -> str:
        return f"Credential(access_token='***', expires_at={self.expires_at!r}, expires_in={self.expires_in})"


class CredentialIssuer:
    """
    Issues and verifies access tokens for persisted users.

    Examples
    --------
    >>> issuer = CredentialIssuer(clock, "http://localhost:8000", timedelta(hours=1), secret)
    >>> credential = issuer.issue(user)
    >>> issuer.verify(credential.access_token)
    '42'
    """

    def __init__(self, clock: Clock, issuer_url: str, lifetime: timedelta, secret: str) -> None:
        if not secret:
            raise ValueError("Signing secret cannot be empty")
        if lifetime <= timedelta(0):
            raise ValueError("Token lifetime must be positive")

        self._clock = clock
        self._issuer_url = issuer_url
        self._lifetime = lifetime
        self._secret = secret

    @property
    def lifetime_seconds(self) -> int:
        return int(self._lifetime.total_seconds())

    def issue(self, user: User) -> Credential:
        """
        Issue a token for a persisted user.

        Raises:
            ValueError: If the user has not been persisted (id <= 0)
            InternalError: If signing fails
        """
        if user.id <= 0:
            raise ValueError(f"Cannot issue a credential for unpersisted user id {user.id}")

        # JWT times are whole seconds; expires_at must agree with exp
        issued_at = self._clock.now().replace(microsecond=0)
        expires_at = issued_at + self._lifetime
        claims = {
            "sub": str(user.id),
            "iss": self._issuer_url,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }

        try:
            token = jwt.encode(claims, self._secret, algorithm=ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise InternalError("generating jwt token from user") from e

        return Credential(access_token=token, expires_at=expires_at, expires_in=self.lifetime_seconds)

    def verify(self, token: str) -> str:
        """
        Verify a token and return its subject (the user id).

        Expiry is checked against the injected clock, so verification
        agrees with issuance on what "now" is.

        Raises:
            Unauthenticated: If the token is malformed, tampered, from another
                issuer or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                issuer=self._issuer_url,
                options={
                    "require": ["sub", "iss", "iat", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except jwt.PyJWTError as e:
            raise Unauthenticated("Invalid token") from e

        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        if self._clock.now() >= expires_at:
            raise Unauthenticated("Token has expired")

        return payload["sub"]
