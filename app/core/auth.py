# app/core/auth.py

import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud import user as user_store
from app.models.user import User
from .exceptions import InvalidCredentials, DuplicateIdentity, MissingCurrentPassword, NotFound
from .security import PasswordHasher, TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """
    Registration, login and credential changes.

    bcrypt work runs in the threadpool so it never blocks the event loop.

    The service never filters by owner and never hands out the password hash;
    routes convert the returned User rows with the UserRead schema.
    """

    def __init__(self, db: AsyncSession, hasher: PasswordHasher, tokens: TokenService):
        self.db = db
        self.hasher = hasher
        self.tokens = tokens

    async def register(self, username: str, password: str) -> User:
        existing = await user_store.get_user_by_username(username, self.db)
        if existing is not None:
            logger.info(f"Registration rejected, username taken: {username}")
            raise DuplicateIdentity()

        hashed = await run_in_threadpool(self.hasher.hash, password)
        user = await user_store.create_user(username, hashed, self.db)
        logger.info(f"Registered user id={user.id} username={user.username}")
        return user

    async def login(self, username: str, password: str) -> str:
        user = await user_store.get_user_by_username(username, self.db)
        if user is None:
            # Burn one bcrypt check so unknown names cost the same as bad passwords
            await run_in_threadpool(self.hasher.dummy_verify, password)
            logger.info(f"Login failed for username={username}")
            raise InvalidCredentials()

        if not await run_in_threadpool(self.hasher.verify, password, user.hashed_password):
            logger.info(f"Login failed for username={username}")
            raise InvalidCredentials()

        logger.info(f"Login succeeded for user id={user.id}")
        return self.tokens.issue(user.id, user.username)

    async def get_profile(self, user_id: int) -> User:
        user = await user_store.get_user_by_id(user_id, self.db)
        if user is None:
            raise NotFound("User not found")
        return user

    async def update_profile(
        self,
        user_id: int,
        username: Optional[str] = None,
        current_password: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        user = await self.get_profile(user_id)

        new_hash = None
        if password:
            if not current_password:
                raise MissingCurrentPassword()
            if not await run_in_threadpool(self.hasher.verify, current_password, user.hashed_password):
                logger.info(f"Password change rejected for user id={user_id}: current password mismatch")
                raise InvalidCredentials("Current password is incorrect")
            new_hash = await run_in_threadpool(self.hasher.hash, password)

        if username is not None and username != user.username:
            taken = await user_store.get_user_by_username(username, self.db)
            if taken is not None:
                raise DuplicateIdentity()
        else:
            username = None

        if username is None and new_hash is None:
            return user

        updated = await user_store.update_user(user, self.db, username=username, hashed_password=new_hash)
        if new_hash is not None:
            logger.info(f"Password changed for user id={user_id}")
        return updated

    async def delete_account(self, user_id: int) -> User:
        user = await self.get_profile(user_id)
        await user_store.delete_user(user, self.db)
        return user

