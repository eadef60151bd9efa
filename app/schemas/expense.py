# app/schemas/expense.py
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime
from app.models.expense import ExpenseCategory

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

class ExpenseCreate(CamelModel):
    # NaN and infinities cannot be stored as amounts
    amount: float = Field(..., allow_inf_nan=False, description="Amount of the expense", examples=[100])
    category: ExpenseCategory = Field(..., description="Category of the expense", examples=["FOOD"])
    note: Optional[str] = Field(None, max_length=255, description="Optional note", examples=["Lunch with client"])
    created_at: Optional[datetime] = Field(
        None,
        description="ISO 8601 creation date, defaults to now",
        examples=["2024-01-01T12:00:00.000Z"],
    )

class ExpenseUpdate(CamelModel):
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    category: Optional[ExpenseCategory] = None
    note: Optional[str] = Field(None, max_length=255)
    created_at: Optional[datetime] = None

class ExpenseRead(CamelModel):
    id: int
    amount: float
    category: ExpenseCategory
    note: Optional[str] = None
    created_at: datetime
    user_id: int

class CategoryTotal(CamelModel):
    category: ExpenseCategory
    total: float

class DailyTotal(CamelModel):
    date: str
    total: float

class MonthlyTotal(CamelModel):
    month: str
    total: float

class ExpenseSummary(CamelModel):
    total: float
    month_total: float
    count: int
    by_category: List[CategoryTotal]
    by_day: List[DailyTotal]
    by_month: List[MonthlyTotal]
