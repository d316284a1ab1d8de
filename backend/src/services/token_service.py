"""Service for issuing and verifying JWT access tokens."""
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

import jwt

from services.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class TokenSubject(Protocol):
    """Anything with the identity fields embedded in a token (User model, claims)."""

    id: int
    email: str
    name: str


@dataclass(frozen=True)
class TokenClaims:
    """Verified identity carried by an access token."""

    id: int
    email: str
    name: str


class TokenService:
    """
    Stateless access tokens signed with a shared secret.

    Tokens are never stored or revoked server-side; a token is valid until
    its ``exp`` claim passes.
    """

    def __init__(
        self,
        secret: str,
        expires_in: timedelta = timedelta(hours=1),
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        self._secret = secret
        self._expires_in = expires_in
        self._issuer = issuer
        self._audience = audience

    def issue(self, subject: TokenSubject) -> str:
        """
        Sign a token for ``subject``.

        Embeds sub/email/name, iat and exp, plus iss and aud when configured.
        """
        now = datetime.now(UTC)
        payload: dict[str, object] = {
            "sub": str(subject.id),
            "email": subject.email,
            "name": subject.name,
            "iat": now,
            "exp": now + self._expires_in,
        }
        if self._issuer:
            payload["iss"] = self._issuer
        if self._audience:
            payload["aud"] = self._audience
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """
        Validate signature, expiry and configured issuer/audience.

        Raises:
            InvalidTokenError: For any failure. The cause is logged, never returned.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                issuer=self._issuer,
                audience=self._audience,
                options={"require": ["exp", "sub"]},
            )
            return TokenClaims(
                id=int(payload["sub"]),
                email=payload["email"],
                name=payload["name"],
            )
        except (jwt.PyJWTError, KeyError, ValueError) as e:
            logger.debug("token_verification_failed reason=%s", type(e).__name__)
            raise InvalidTokenError() from e
