# app/api/deps.py
import logging
from typing import Optional
from fastapi import Depends, Path
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AuthService
from app.core.database import get_async_session
from app.core.exceptions import InvalidToken, Unauthenticated
from app.core.ownership import IdentityContext, load_owned_expense
from app.core.security import PasswordHasher, TokenService, password_hasher, token_service
from app.models.expense import Expense
from app.models.user import User

logger = logging.getLogger(__name__)

# auto_error=False so a missing header goes through our own Unauthenticated error
optional_security = HTTPBearer(auto_error=False)

def get_token_service() -> TokenService:
    return token_service

def get_password_hasher() -> PasswordHasher:
    return password_hasher

def get_auth_service(
    db: AsyncSession = Depends(get_async_session),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(db, hasher, tokens)

async def get_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    tokens: TokenService = Depends(get_token_service),
) -> IdentityContext:
    """
    Access guard for protected routes.

    Accepts only ``Authorization: Bearer <token>``. Missing header, wrong
    scheme, bad signature, malformed or expired token all produce the same
    401 response; the precise reason is only logged.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()

    try:
        claims = tokens.verify(credentials.credentials)
    except InvalidToken as e:
        logger.debug(f"Rejected bearer token: {e.reason}")
        raise Unauthenticated()

    return IdentityContext(user_id=claims.user_id, username=claims.username)

async def get_current_user(
    identity: IdentityContext = Depends(get_identity),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Resolve the identity to its stored user; 404 if the account was deleted."""
    return await auth.get_profile(identity.user_id)

async def get_owned_expense(
    expense_id: int = Path(..., description="Expense ID"),
    identity: IdentityContext = Depends(get_identity),
    db: AsyncSession = Depends(get_async_session),
) -> Expense:
    return await load_owned_expense(expense_id, identity, db)
