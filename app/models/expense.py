# app/models/expense.py
from datetime import datetime, timezone
from sqlalchemy import Column, ForeignKey, Float, Enum, DateTime, Integer, String
from sqlalchemy.orm import relationship
from app.core.database import Base
import enum

class ExpenseCategory(str, enum.Enum):
    FOOD = "FOOD"
    TRAVEL = "TRAVEL"
    OFFICE = "OFFICE"
    SHOPPING = "SHOPPING"
    INVESTMENTS = "INVESTMENTS"
    OTHER = "OTHER"

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

class Expense(Base):
    __tablename__ = "expenses"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    amount = Column(Float, nullable=False)
    category = Column(Enum(ExpenseCategory, name="expense_category"), nullable=False)
    note = Column(String(length=255), nullable=True)
    # Client may backdate; defaults to insert time
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="expenses")

    def __repr__(self):
        return f"<Expense id={self.id} amount={self.amount} category={self.category} user_id={self.user_id}>"
