# app/core/ownership.py
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.expense import get_expense_by_id
from app.models.expense import Expense
from .exceptions import AccessDenied

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityContext:
    """Who the verified bearer token says is calling."""
    user_id: int
    username: str


def ensure_owner(expense: Optional[Expense], identity: IdentityContext) -> Expense:
    # Missing and foreign rows share one error so other users' ids stay hidden
    if expense is None or expense.user_id != identity.user_id:
        logger.info(f"Expense access denied for user id={identity.user_id}")
        raise AccessDenied("Access denied")
    return expense


async def load_owned_expense(expense_id: int, identity: IdentityContext, db: AsyncSession) -> Expense:
    expense = await get_expense_by_id(expense_id, db)
    return ensure_owner(expense, identity)
