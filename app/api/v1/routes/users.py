# app/api/v1/routes/users.py
from typing import List

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_auth_service, get_current_user, get_identity
from app.core.auth import AuthService
from app.core.exceptions import AccessDenied
from app.core.ownership import IdentityContext
from app.crud.user import list_users
from app.models.user import User
from app.schemas.user import UserRead, UserUpdate

router = APIRouter(prefix="/user", tags=["User Management"])

async def _apply_update(user_id: int, user_update: UserUpdate, auth: AuthService) -> UserRead:
    user = await auth.update_profile(
        user_id,
        username=user_update.username,
        current_password=user_update.current_password,
        password=user_update.password,
    )
    return UserRead.model_validate(user)

# 1) GET /user/me
@router.get("/me", response_model=UserRead)
async def read_own_profile(user: User = Depends(get_current_user)):
    """Get current user's profile"""
    return UserRead.model_validate(user)

# 2) PUT /user/me
@router.put("/me", response_model=UserRead)
async def update_own_profile(
    user_update: UserUpdate,
    identity: IdentityContext = Depends(get_identity),
    auth: AuthService = Depends(get_auth_service),
):
    """Update username and/or password; a new password needs currentPassword"""
    return await _apply_update(identity.user_id, user_update, auth)

# 3) DELETE /user/me
@router.delete("/me", response_model=UserRead)
async def delete_own_profile(
    identity: IdentityContext = Depends(get_identity),
    auth: AuthService = Depends(get_auth_service),
):
    """Delete current user's account and expenses permanently"""
    user = await auth.delete_account(identity.user_id)
    return UserRead.model_validate(user)

# 4) List users with pagination
@router.get("", response_model=List[UserRead])
async def read_users(
    identity: IdentityContext = Depends(get_identity),
    auth: AuthService = Depends(get_auth_service),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1),
):
    # Cap page size to prevent large data dumps
    limit = min(limit, 100)
    users = await list_users(auth.db, skip=skip, limit=limit)
    return [UserRead.model_validate(u) for u in users]

# 5) PUT /user/{user_id}: only the caller's own id is accepted
@router.put("/{user_id}", response_model=UserRead)
async def update_user_by_id(
    user_id: int,
    user_update: UserUpdate,
    identity: IdentityContext = Depends(get_identity),
    auth: AuthService = Depends(get_auth_service),
):
    if identity.user_id != user_id:
        raise AccessDenied("You can only update your own profile")
    return await _apply_update(user_id, user_update, auth)

# 6) DELETE /user/{user_id}
@router.delete("/{user_id}", response_model=UserRead)
async def delete_user_by_id(
    user_id: int,
    identity: IdentityContext = Depends(get_identity),
    auth: AuthService = Depends(get_auth_service),
):
    if identity.user_id != user_id:
        raise AccessDenied("You can only delete your own profile")
    user = await auth.delete_account(user_id)
    return UserRead.model_validate(user)
