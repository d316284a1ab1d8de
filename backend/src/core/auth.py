"""Request authentication gate for bearer access tokens."""
from fastapi import Depends, Header, Request

from core.config import Settings
from core.context import AppContext, get_app_context
from services.exceptions import MissingTokenError
from services.token_service import TokenClaims, TokenService

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: str | None) -> str:
    """
    Return the token from an ``Authorization: Bearer <token>`` header.

    The scheme is matched exactly, including case and the single space.

    Raises:
        MissingTokenError: If the header is absent or has another format.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise MissingTokenError()
    return authorization.split(" ")[1]


def authenticate(request: Request, authorization: str | None, tokens: TokenService) -> TokenClaims:
    """
    Verify the request's bearer token and attach the identity to ``request.state.user``.

    The identity comes from the token claims alone; the user is not re-read
    from the database.

    Raises:
        MissingTokenError: No usable Authorization header.
        InvalidTokenError: Bad signature, expired, or wrong issuer/audience.
    """
    token = extract_bearer_token(authorization)
    claims = tokens.verify(token)
    request.state.user = claims
    return claims


async def get_current_user(
    request: Request,
    authorization: str | None = Header(default=None),
    context: AppContext = Depends(get_app_context),
) -> TokenClaims:
    """Dependency for protected routes."""
    return authenticate(request, authorization, context.tokens)


async def get_photo_uploader(
    request: Request,
    authorization: str | None = Header(default=None),
    context: AppContext = Depends(get_app_context),
) -> TokenClaims | None:
    """
    Dependency for the profile photo upload.

    The upload is public unless PHOTO_UPLOAD_REQUIRES_AUTH is set.
    """
    settings: Settings = context.settings
    if not settings.photo_upload_requires_auth:
        return None
    return authenticate(request, authorization, context.tokens)
