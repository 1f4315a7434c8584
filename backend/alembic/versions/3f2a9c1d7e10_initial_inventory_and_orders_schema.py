"""Initial inventory and orders schema

Revision ID: 3f2a9c1d7e10
Revises: 
Create Date: 2026-10-18 10:12:41.503117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# Revision identifiers used by Alembic
revision: str = '3f2a9c1d7e10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SALES_STATUSES = ('PENDING', 'PROCESSING', 'SHIPPED', 'DELIVERED', 'CANCELLED')
PURCHASE_STATUSES = ('PENDING', 'APPROVED', 'RECEIVED', 'CANCELLED')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
    ]


def _partner_columns():
    return [
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('city', sa.String(), nullable=True),
        sa.Column('state', sa.String(), nullable=True),
        sa.Column('zip_code', sa.String(), nullable=True),
        sa.Column('contact_person', sa.String(), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'suppliers',
        *_partner_columns(),
        sa.Column('website', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'name', name='uq_supplier_user_name'),
    )
    op.create_index('ix_suppliers_user_id', 'suppliers', ['user_id'])

    op.create_table(
        'customers',
        *_partner_columns(),
        sa.Column('company_type', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'name', name='uq_customer_user_name'),
    )
    op.create_index('ix_customers_user_id', 'customers', ['user_id'])

    op.create_table(
        'inventory',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('product_name', sa.String(), nullable=False),
        sa.Column('sku', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=False),
        sa.Column('quantity', sa.Integer(), sa.CheckConstraint('quantity >= 0'), nullable=False),
        sa.Column('unit_price', sa.Numeric(12, 2), sa.CheckConstraint('unit_price >= 0'), nullable=False),
        sa.Column('reorder_level', sa.Integer(), sa.CheckConstraint('reorder_level >= 0'), nullable=False),
        sa.Column('supplier', sa.String(), nullable=True),
        sa.Column('supplier_id', sa.String(length=36), sa.ForeignKey('suppliers.id'), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'sku', name='uq_inventory_user_sku'),
    )
    for column in ('user_id', 'product_name', 'sku', 'category', 'supplier_id'):
        op.create_index(f'ix_inventory_{column}', 'inventory', [column])

    op.create_table(
        'sales_orders',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('order_number', sa.String(), nullable=False),
        sa.Column('customer_id', sa.String(length=36), sa.ForeignKey('customers.id'), nullable=True),
        sa.Column('customer_name', sa.String(), nullable=False),
        sa.Column('customer_email', sa.String(), nullable=True),
        sa.Column('subtotal', sa.Numeric(12, 2), nullable=False),
        sa.Column('tax_rate', sa.Numeric(5, 2), sa.CheckConstraint('tax_rate >= 0'), nullable=False),
        sa.Column('tax_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('shipping_cost', sa.Numeric(12, 2), sa.CheckConstraint('shipping_cost >= 0'), nullable=False),
        sa.Column('total_amount', sa.Numeric(12, 2), sa.CheckConstraint('total_amount >= 0'), nullable=False),
        sa.Column('status', sa.Enum(*SALES_STATUSES, name='salesorderstatus'), nullable=False),
        sa.Column('order_date', sa.DateTime(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'order_number', name='uq_sales_order_user_number'),
    )
    for column in ('user_id', 'customer_id', 'status', 'order_date', 'created_at'):
        op.create_index(f'ix_sales_orders_{column}', 'sales_orders', [column])

    op.create_table(
        'sales_order_items',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('sales_order_id', sa.String(length=36),
                  sa.ForeignKey('sales_orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('inventory_id', sa.String(length=36), sa.ForeignKey('inventory.id'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), sa.CheckConstraint('quantity > 0'), nullable=False),
        sa.Column('unit_price', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False),
    )
    op.create_index('ix_sales_order_items_sales_order_id', 'sales_order_items', ['sales_order_id'])
    op.create_index('ix_sales_order_items_inventory_id', 'sales_order_items', ['inventory_id'])

    op.create_table(
        'purchase_orders',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('user_id', sa.String(length=36), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('po_number', sa.String(), nullable=False),
        sa.Column('supplier_id', sa.String(length=36), sa.ForeignKey('suppliers.id'), nullable=True),
        sa.Column('supplier_name', sa.String(), nullable=False),
        sa.Column('supplier_email', sa.String(), nullable=True),
        sa.Column('total_amount', sa.Numeric(12, 2), sa.CheckConstraint('total_amount >= 0'), nullable=False),
        sa.Column('status', sa.Enum(*PURCHASE_STATUSES, name='purchaseorderstatus'), nullable=False),
        sa.Column('order_date', sa.DateTime(), nullable=False),
        sa.Column('expected_delivery', sa.DateTime(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'po_number', name='uq_purchase_order_user_number'),
    )
    for column in ('user_id', 'supplier_id', 'status', 'order_date', 'expected_delivery', 'created_at'):
        op.create_index(f'ix_purchase_orders_{column}', 'purchase_orders', [column])

    op.create_table(
        'purchase_order_items',
        sa.Column('id', sa.String(length=36), primary_key=True),
        sa.Column('purchase_order_id', sa.String(length=36),
                  sa.ForeignKey('purchase_orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('inventory_id', sa.String(length=36), sa.ForeignKey('inventory.id'), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), sa.CheckConstraint('quantity > 0'), nullable=False),
        sa.Column('cost_per_unit', sa.Numeric(12, 2), nullable=False),
        sa.Column('total_cost', sa.Numeric(12, 2), nullable=False),
    )
    op.create_index('ix_purchase_order_items_purchase_order_id', 'purchase_order_items', ['purchase_order_id'])
    op.create_index('ix_purchase_order_items_inventory_id', 'purchase_order_items', ['inventory_id'])


def downgrade() -> None:
    """Downgrade schema."""
    # Children first so foreign keys never dangle
    op.drop_table('purchase_order_items')
    op.drop_table('purchase_orders')
    op.drop_table('sales_order_items')
    op.drop_table('sales_orders')
    op.drop_table('inventory')
    op.drop_table('customers')
    op.drop_table('suppliers')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    sa.Enum(name='purchaseorderstatus').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='salesorderstatus').drop(op.get_bind(), checkfirst=True)
