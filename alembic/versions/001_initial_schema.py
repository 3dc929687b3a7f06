"""Initial schema with all tables

Revision ID: 001_initial_schema
Revises: 
Create Date: 2025-05-01

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # Tenants table
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('domain', sa.String(255), nullable=False),
        sa.Column('custom_domain', sa.String(255), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('status', sa.Enum('active', 'suspended', 'inactive', name='tenantstatus'), nullable=False, server_default='active'),
        sa.Column('plan', sa.Enum('free', 'premium', 'enterprise', name='tenantplan'), nullable=False, server_default='free'),
        sa.Column('settings', sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_tenants_slug', 'tenants', ['slug'], unique=True)
    op.create_index('ix_tenants_domain', 'tenants', ['domain'], unique=True)
    op.create_index('ix_tenants_custom_domain', 'tenants', ['custom_domain'], unique=True)

    # Users table
    op.create_table(
        'users',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=True),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('role', sa.Enum('SUPERADMIN', 'ADMIN', 'ORDERS_MANAGER', name='userrole'), nullable=False, server_default='ADMIN'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_tenant_id', 'users', ['tenant_id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Categories table
    op.create_table(
        'categories',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(100), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        *_timestamps(),
        sa.UniqueConstraint('slug', 'tenant_id', name='uq_categories_slug_tenant'),
    )
    op.create_index('ix_categories_tenant_id', 'categories', ['tenant_id'])
    op.create_index('ix_category_tenant_order', 'categories', ['tenant_id', 'sort_order'])

    # Dishes table; subtag_ids is an unenforced list of subtag ids
    op.create_table(
        'dishes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category_id', sa.String(36), sa.ForeignKey('categories.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('image', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('allergens', sa.JSON(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        sa.Column('subtag_ids', sa.JSON(), nullable=False),
        sa.Column('preparation_time', sa.Integer(), nullable=True),
        sa.Column('servings', sa.Integer(), nullable=True),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.UniqueConstraint('slug', 'tenant_id', name='uq_dishes_slug_tenant'),
    )
    op.create_index('ix_dishes_tenant_id', 'dishes', ['tenant_id'])
    op.create_index('ix_dishes_category_id', 'dishes', ['category_id'])
    op.create_index('ix_dish_tenant_category', 'dishes', ['tenant_id', 'category_id'])

    # Subtags table
    op.create_table(
        'subtags',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_subtags_tenant_id', 'subtags', ['tenant_id'])
    op.create_index(
        'uq_subtags_tenant_lower_name',
        'subtags',
        ['tenant_id', sa.text('lower(name)')],
        unique=True,
    )

    # Orders table
    op.create_table(
        'orders',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=False),
        sa.Column('order_number', sa.String(10), nullable=False),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('customer', sa.JSON(), nullable=False),
        sa.Column('delivery', sa.JSON(), nullable=False),
        sa.Column('payment', sa.JSON(), nullable=False),
        sa.Column('customer_phone', sa.String(20), nullable=False),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('total', sa.Numeric(10, 2), nullable=False),
        sa.Column(
            'status',
            sa.Enum('PENDING', 'PREPARING', 'READY', 'DELIVERED', 'CANCELLED', name='orderstatus'),
            nullable=False,
            server_default='PREPARING',
        ),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('order_number', 'tenant_id', name='uq_orders_order_number_tenant'),
    )
    op.create_index('ix_orders_tenant_id', 'orders', ['tenant_id'])
    op.create_index('ix_order_tenant_created', 'orders', ['tenant_id', 'created_at'])
    op.create_index('ix_order_tenant_status', 'orders', ['tenant_id', 'status'])
    op.create_index('ix_order_tenant_phone', 'orders', ['tenant_id', 'customer_phone'])

    # Logs table
    op.create_table(
        'logs',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('level', sa.Enum('info', 'warning', 'error', name='loglevel'), nullable=False),
        sa.Column(
            'action',
            sa.Enum(
                'tenant_created', 'tenant_updated', 'tenant_suspended', 'tenant_activated',
                'tenant_deleted', 'user_login', 'order_delivered', 'order_deleted',
                name='logaction',
            ),
            nullable=False,
        ),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        sa.Column('user_email', sa.String(255), nullable=True),
        sa.Column('tenant_id', sa.String(36), sa.ForeignKey('tenants.id', ondelete='CASCADE'), nullable=True),
        sa.Column('tenant_name', sa.String(255), nullable=True),
        sa.Column('ip_address', sa.String(64), nullable=True),
        sa.Column('user_agent', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_log_created', 'logs', ['created_at'])
    op.create_index('ix_log_tenant_created', 'logs', ['tenant_id', 'created_at'])
    op.create_index('ix_log_action', 'logs', ['action'])


def downgrade() -> None:
    op.drop_table('logs')
    op.drop_table('orders')
    op.drop_table('subtags')
    op.drop_table('dishes')
    op.drop_table('categories')
    op.drop_table('users')
    op.drop_table('tenants')

    # Drop enums
    op.execute('DROP TYPE IF EXISTS logaction')
    op.execute('DROP TYPE IF EXISTS loglevel')
    op.execute('DROP TYPE IF EXISTS orderstatus')
    op.execute('DROP TYPE IF EXISTS userrole')
    op.execute('DROP TYPE IF EXISTS tenantplan')
    op.execute('DROP TYPE IF EXISTS tenantstatus')
