"""create users and expenses

Revision ID: c31f0a7d52e4
Revises: 
Create Date: 2025-06-02

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'c31f0a7d52e4'
down_revision = None
branch_labels = None
depends_on = None

EXPENSE_CATEGORIES = ('FOOD', 'TRAVEL', 'OFFICE', 'SHOPPING', 'INVESTMENTS', 'OTHER')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=150), nullable=False),
        sa.Column('hashed_password', sa.String, nullable=False),
    )
    op.create_index('ix_users_username', 'users', ['username'], unique=True)

    op.create_table(
        'expenses',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.Float, nullable=False),
        sa.Column('category', sa.Enum(*EXPENSE_CATEGORIES, name='expense_category'), nullable=False),
        sa.Column('note', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_expenses_user_id', 'expenses', ['user_id'])


def downgrade():
    op.drop_index('ix_expenses_user_id', table_name='expenses')
    op.drop_table('expenses')
    op.drop_index('ix_users_username', table_name='users')
    op.drop_table('users')
    sa.Enum(name='expense_category').drop(op.get_bind(), checkfirst=True)
