# app/api/v1/routes/expenses.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.api.deps import get_current_user, get_identity, get_owned_expense
from app.core.database import get_async_session
from app.core.ownership import IdentityContext
from app.crud.expense import (
    create_expense_for_user,
    get_expenses_for_user,
    update_expense,
    delete_expense,
)
from app.models.expense import Expense
from app.models.user import User
from app.schemas.expense import ExpenseCreate, ExpenseRead, ExpenseSummary, ExpenseUpdate
from app.utils.aggregation import summarize_expenses

router = APIRouter(prefix="/expense", tags=["expenses"])

@router.post("", response_model=ExpenseRead, status_code=status.HTTP_201_CREATED)
async def create_expense(
    ex_in: ExpenseCreate,
    db: AsyncSession = Depends(get_async_session),
    current_user: User = Depends(get_current_user),
):
    # Owner always comes from the token, never from the body; a deleted account is a 404
    return await create_expense_for_user(current_user.id, ex_in, db)

@router.get("", response_model=List[ExpenseRead])
async def read_expenses(
    db: AsyncSession = Depends(get_async_session),
    identity: IdentityContext = Depends(get_identity),
):
    return await get_expenses_for_user(identity.user_id, db)

@router.get("/summary", response_model=ExpenseSummary)
async def read_expense_summary(
    db: AsyncSession = Depends(get_async_session),
    identity: IdentityContext = Depends(get_identity),
):
    """
    Dashboard aggregates for the caller: total, current month total,
    number of expenses and totals grouped by category, day and month.
    """
    expenses = await get_expenses_for_user(identity.user_id, db)
    return summarize_expenses(expenses)

@router.get("/{expense_id}", response_model=ExpenseRead)
async def read_expense(expense: Expense = Depends(get_owned_expense)):
    return expense

@router.put("/{expense_id}", response_model=ExpenseRead)
async def update_expense_endpoint(
    ex_in: ExpenseUpdate,
    expense: Expense = Depends(get_owned_expense),
    db: AsyncSession = Depends(get_async_session),
):
    return await update_expense(expense, ex_in, db)

@router.delete("/{expense_id}", response_model=ExpenseRead)
async def delete_expense_endpoint(
    expense: Expense = Depends(get_owned_expense),
    db: AsyncSession = Depends(get_async_session),
):
    deleted = ExpenseRead.model_validate(expense)
    await delete_expense(expense, db)
    return deleted
