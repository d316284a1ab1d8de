"""Signup and signin endpoints."""
from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from schemas.user import AuthResponse, SigninRequest, SignupRequest, UserResponse
from services.auth_service import AuthService

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    data: SignupRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Register a user and return it with an access token."""
    user = await auth.register(data.name, data.email, data.password)
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=auth.issue_token(user),
    )


@router.post("/signin", response_model=AuthResponse)
async def signin(
    data: SigninRequest,
    auth: AuthService = Depends(get_auth_service),
) -> AuthResponse:
    """Log in with email and password."""
    user, token = await auth.login(data.email, data.password)
    return AuthResponse(user=UserResponse.model_validate(user), access_token=token)
