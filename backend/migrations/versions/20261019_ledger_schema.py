"""Ledger schema: sales, expenses, inventory, petty cash, stream revisions

Revision ID: 20261019_ledger
Revises:
Create Date: 2026-10-19

This migration adds:
1. SalesEntry and ExpenseEntry (calendar-day money records)
2. InventoryItem and StockMovement (catalog plus append-only stock ledger)
3. PettyCashTransaction (append-only cash box ledger)
4. StreamRevision (per-stream write counter used as snapshot version)
"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '20261019_ledger'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(with_updated=True):
    cols = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]
    if with_updated:
        cols.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False)
        )
    return cols


def upgrade():
    # ==========================================================================
    # 1. SALES / EXPENSES
    # ==========================================================================
    op.create_table('sales_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Integer(), nullable=False),
        sa.Column('amount_cents', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount_cents >= 0', name='ck_sales_amount_non_negative'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    with op.batch_alter_table('sales_entries', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_sales_entries_date'), ['date'], unique=False)

    op.create_table('expense_entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=32), nullable=False),
        sa.Column('expense_type', sa.String(length=16), nullable=False),
        sa.Column('payment_method', sa.String(length=16), nullable=False),
        sa.Column('amount_cents', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint('amount_cents >= 0', name='ck_expense_amount_non_negative'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    with op.batch_alter_table('expense_entries', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_expense_entries_date'), ['date'], unique=False)
        batch_op.create_index('ix_expense_entries_date_category', ['date', 'category'], unique=False)

    # ==========================================================================
    # 2. INVENTORY
    # ==========================================================================
    op.create_table('inventory_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('unit', sa.String(length=32), nullable=False),
        sa.Column('low_stock_threshold', sa.Numeric(precision=12, scale=3), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    with op.batch_alter_table('inventory_items', schema=None) as batch_op:
        batch_op.create_index('ix_inventory_items_name', ['name'], unique=False)

    # No FK on item_id: movements outlive their catalog item
    op.create_table('stock_movements',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('item_id', sa.Integer(), nullable=False),
        sa.Column('movement_type', sa.String(length=16), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=12, scale=3), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('occurred_at', sa.DateTime(), nullable=False),
        *_timestamps(with_updated=False),
        sa.CheckConstraint('quantity >= 0', name='ck_stock_movement_quantity_non_negative'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    with op.batch_alter_table('stock_movements', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_stock_movements_item_id'), ['item_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_stock_movements_occurred_at'), ['occurred_at'], unique=False)

    # ==========================================================================
    # 3. PETTY CASH
    # ==========================================================================
    op.create_table('petty_cash_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('transaction_type', sa.String(length=16), nullable=False),
        sa.Column('amount_cents', sa.Integer(), nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=False),
        sa.Column('occurred_at', sa.DateTime(), nullable=False),
        *_timestamps(with_updated=False),
        sa.CheckConstraint('amount_cents >= 0', name='ck_petty_cash_amount_non_negative'),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True
    )
    with op.batch_alter_table('petty_cash_transactions', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_petty_cash_transactions_occurred_at'), ['occurred_at'], unique=False)

    # ==========================================================================
    # 4. STREAM REVISIONS
    # ==========================================================================
    op.create_table('stream_revisions',
        sa.Column('stream', sa.String(length=32), nullable=False),
        sa.Column('revision', sa.Integer(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.PrimaryKeyConstraint('stream')
    )


def downgrade():
    op.drop_table('stream_revisions')

    with op.batch_alter_table('petty_cash_transactions', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_petty_cash_transactions_occurred_at'))
    op.drop_table('petty_cash_transactions')

    with op.batch_alter_table('stock_movements', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_stock_movements_occurred_at'))
        batch_op.drop_index(batch_op.f('ix_stock_movements_item_id'))
    op.drop_table('stock_movements')

    with op.batch_alter_table('inventory_items', schema=None) as batch_op:
        batch_op.drop_index('ix_inventory_items_name')
    op.drop_table('inventory_items')

    with op.batch_alter_table('expense_entries', schema=None) as batch_op:
        batch_op.drop_index('ix_expense_entries_date_category')
        batch_op.drop_index(batch_op.f('ix_expense_entries_date'))
    op.drop_table('expense_entries')

    with op.batch_alter_table('sales_entries', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_sales_entries_date'))
    op.drop_table('sales_entries')
