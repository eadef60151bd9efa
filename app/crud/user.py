# app/crud/user.py
import logging
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.core.exceptions import DuplicateIdentity
from app.models.expense import Expense
from app.models.user import User
from typing import Optional, List

logger = logging.getLogger(__name__)

async def get_user_by_username(username: str, db: AsyncSession) -> Optional[User]:
    # Exact, case-sensitive match
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()

async def get_user_by_id(user_id: int, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()

async def list_users(db: AsyncSession, skip: int = 0, limit: int = 100) -> List[User]:
    result = await db.execute(select(User).order_by(User.id).offset(skip).limit(limit))
    return result.scalars().all()

async def create_user(username: str, hashed_password: str, db: AsyncSession) -> User:
    new_user = User(username=username, hashed_password=hashed_password)
    db.add(new_user)
    try:
        await db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration of the same name
        await db.rollback()
        raise DuplicateIdentity()
    await db.refresh(new_user)
    return new_user

async def update_user(
    user: User,
    db: AsyncSession,
    username: Optional[str] = None,
    hashed_password: Optional[str] = None,
) -> User:
    if username is not None:
        user.username = username
    if hashed_password is not None:
        user.hashed_password = hashed_password
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise DuplicateIdentity()
    await db.refresh(user)
    return user

async def delete_user(user: User, db: AsyncSession) -> None:
    # Explicit delete so SQLite without foreign key enforcement matches PostgreSQL's cascade
    await db.execute(delete(Expense).where(Expense.user_id == user.id))
    await db.delete(user)
    await db.commit()
    logger.info(f"Deleted user id={user.id} and owned expenses")
