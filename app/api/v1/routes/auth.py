# app/api/v1/routes/auth.py
from fastapi import APIRouter, Depends, status

from app.api.deps import get_auth_service
from app.core.auth import AuthService
from app.schemas.user import Token, UserLogin, UserRead, UserRegister

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(
    user_in: UserRegister,
    auth: AuthService = Depends(get_auth_service),
):
    """Register a new user; returns the created user without the password"""
    user = await auth.register(user_in.username, user_in.password)
    return UserRead.model_validate(user)

@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    auth: AuthService = Depends(get_auth_service),
):
    """Login and receive a JWT access token"""
    access_token = await auth.login(credentials.username, credentials.password)
    return Token(access_token=access_token, expires_in=auth.tokens.expires_in)

@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout():
    """
    Tokens are stateless and are not revoked server-side.
    Logging out means the client discards its token.
    """
    return {"detail": "Successfully logged out"}
