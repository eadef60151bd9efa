# app/crud/expense.py
from sqlalchemy import desc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from app.models.expense import Expense
from typing import List, Optional
from app.schemas.expense import ExpenseCreate, ExpenseUpdate

# Columns that may be cleared by sending null; the rest are NOT NULL
NULLABLE_FIELDS = {"note"}

async def get_expenses_for_user(user_id: int, db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        select(Expense)
        .where(Expense.user_id == user_id)
        .order_by(desc(Expense.created_at), desc(Expense.id))
    )
    return result.scalars().all()

async def get_expense_by_id(expense_id: int, db: AsyncSession) -> Optional[Expense]:
    # Unscoped lookup; callers apply the ownership policy
    result = await db.execute(select(Expense).where(Expense.id == expense_id))
    return result.scalar_one_or_none()

async def create_expense_for_user(user_id: int, ex_in: ExpenseCreate, db: AsyncSession) -> Expense:
    data = ex_in.model_dump(exclude_none=True)
    new_ex = Expense(**data, user_id=user_id)
    db.add(new_ex)
    await db.commit()
    await db.refresh(new_ex)
    return new_ex

async def update_expense(expense: Expense, ex_in: ExpenseUpdate, db: AsyncSession) -> Expense:
    for field, value in ex_in.model_dump(exclude_unset=True).items():
        if value is None and field not in NULLABLE_FIELDS:
            continue
        setattr(expense, field, value)
    db.add(expense)
    await db.commit()
    await db.refresh(expense)
    return expense

async def delete_expense(expense: Expense, db: AsyncSession) -> None:
    await db.delete(expense)
    await db.commit()
