"""create restaurant schema

Revision ID: create_restaurant_schema_20240601
Revises:
Create Date: 2024-06-01 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'create_restaurant_schema_20240601'
down_revision = None
branch_labels = None
depends_on = None


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    # Restaurants and floor
    op.create_table('restaurants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address', sa.String(length=500), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_restaurants_id'), 'restaurants', ['id'], unique=False)
    op.create_index(op.f('ix_restaurants_owner_id'), 'restaurants', ['owner_id'], unique=False)

    op.create_table('tables',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('table_number', sa.String(length=20), nullable=False),
        sa.Column('capacity', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('available', 'occupied', 'reserved', 'cleaning', 'out_of_order',
                                    name='table_status'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.CheckConstraint('capacity > 0', name='ck_tables_capacity_positive'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('restaurant_id', 'table_number', name='uq_tables_restaurant_number')
    )
    op.create_index(op.f('ix_tables_id'), 'tables', ['id'], unique=False)
    op.create_index('ix_tables_status', 'tables', ['status'], unique=False)

    # Accounts
    op.create_table('profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('username', sa.String(length=50), nullable=True),
        sa.Column('full_name', sa.String(length=200), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_profiles_id'), 'profiles', ['id'], unique=False)
    op.create_index(op.f('ix_profiles_user_id'), 'profiles', ['user_id'], unique=True)
    op.create_index(op.f('ix_profiles_email'), 'profiles', ['email'], unique=False)
    op.create_index(op.f('ix_profiles_username'), 'profiles', ['username'], unique=True)

    # Menu
    op.create_table('menu_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('cost_price', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.Column('preparation_time', sa.Integer(), nullable=True),
        sa.Column('estimated_prep_time', sa.Integer(), nullable=True),
        sa.Column('spice_level', sa.Integer(), nullable=True),
        sa.Column('calories', sa.Integer(), nullable=True),
        sa.Column('allergens', sa.JSON(), nullable=True),
        sa.Column('dietary_tags', sa.JSON(), nullable=True),
        *timestamps(),
        sa.CheckConstraint('price >= 0', name='ck_menu_items_price_non_negative'),
        sa.CheckConstraint('spice_level >= 0 AND spice_level <= 5', name='ck_menu_items_spice_level'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_menu_items_id'), 'menu_items', ['id'], unique=False)
    op.create_index(op.f('ix_menu_items_restaurant_id'), 'menu_items', ['restaurant_id'], unique=False)
    op.create_index(op.f('ix_menu_items_name'), 'menu_items', ['name'], unique=False)
    op.create_index(op.f('ix_menu_items_category'), 'menu_items', ['category'], unique=False)
    op.create_index('ix_menu_items_restaurant_category', 'menu_items', ['restaurant_id', 'category'], unique=False)

    op.create_table('menu_modifiers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price_adjustment', sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column('modifier_type', sa.String(length=20), nullable=False),
        sa.Column('applicable_categories', sa.JSON(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.CheckConstraint("modifier_type IN ('addition', 'substitution', 'removal')",
                           name='ck_menu_modifiers_type'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('restaurant_id', 'name', name='uq_menu_modifiers_restaurant_name')
    )
    op.create_index(op.f('ix_menu_modifiers_id'), 'menu_modifiers', ['id'], unique=False)
    op.create_index(op.f('ix_menu_modifiers_restaurant_id'), 'menu_modifiers', ['restaurant_id'], unique=False)

    op.create_table('menu_item_modifiers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('menu_item_id', sa.Integer(), nullable=False),
        sa.Column('modifier_id', sa.Integer(), nullable=False),
        sa.Column('is_required', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['menu_item_id'], ['menu_items.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['modifier_id'], ['menu_modifiers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('menu_item_id', 'modifier_id', name='uq_menu_item_modifiers_item_modifier')
    )
    op.create_index(op.f('ix_menu_item_modifiers_id'), 'menu_item_modifiers', ['id'], unique=False)
    op.create_index(op.f('ix_menu_item_modifiers_menu_item_id'), 'menu_item_modifiers',
                    ['menu_item_id'], unique=False)
    op.create_index(op.f('ix_menu_item_modifiers_modifier_id'), 'menu_item_modifiers',
                    ['modifier_id'], unique=False)

    # Customers
    op.create_table('customer_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('dietary_preferences', sa.JSON(), nullable=True),
        sa.Column('allergens', sa.JSON(), nullable=True),
        sa.Column('favorite_restaurant_id', sa.Integer(), nullable=True),
        sa.Column('preferred_table_size', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('total_visits', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_spent', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('loyalty_points', sa.Integer(), nullable=False, server_default='0'),
        *timestamps(),
        sa.CheckConstraint('total_visits >= 0', name='ck_customer_profiles_visits_non_negative'),
        sa.ForeignKeyConstraint(['favorite_restaurant_id'], ['restaurants.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_customer_profiles_id'), 'customer_profiles', ['id'], unique=False)
    op.create_index(op.f('ix_customer_profiles_phone'), 'customer_profiles', ['phone'], unique=True)
    op.create_index(op.f('ix_customer_profiles_email'), 'customer_profiles', ['email'], unique=True)

    # Staff
    op.create_table('staff_roles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=50), nullable=False),
        sa.Column('description', sa.String(length=255), nullable=True),
        sa.Column('permissions', sa.JSON(), nullable=True),
        sa.Column('hourly_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('restaurant_id', 'name', name='uq_staff_roles_restaurant_name')
    )
    op.create_index(op.f('ix_staff_roles_id'), 'staff_roles', ['id'], unique=False)
    op.create_index(op.f('ix_staff_roles_restaurant_id'), 'staff_roles', ['restaurant_id'], unique=False)

    op.create_table('restaurant_staff',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('role_id', sa.Integer(), nullable=False),
        sa.Column('employee_id', sa.String(length=50), nullable=True),
        sa.Column('hire_date', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('emergency_contact_name', sa.String(length=100), nullable=True),
        sa.Column('emergency_contact_phone', sa.String(length=20), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['role_id'], ['staff_roles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('restaurant_id', 'user_id', name='uq_restaurant_staff_user')
    )
    op.create_index(op.f('ix_restaurant_staff_id'), 'restaurant_staff', ['id'], unique=False)
    op.create_index(op.f('ix_restaurant_staff_restaurant_id'), 'restaurant_staff', ['restaurant_id'], unique=False)
    op.create_index(op.f('ix_restaurant_staff_user_id'), 'restaurant_staff', ['user_id'], unique=False)

    op.create_table('staff_shifts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('staff_id', sa.Integer(), nullable=False),
        sa.Column('shift_date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('actual_start_time', sa.DateTime(), nullable=True),
        sa.Column('actual_end_time', sa.DateTime(), nullable=True),
        sa.Column('break_duration', sa.Integer(), nullable=True),
        sa.Column('status', sa.Enum('scheduled', 'in_progress', 'completed', 'cancelled',
                                    name='shift_status'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *timestamps(),
        sa.CheckConstraint('break_duration >= 0', name='ck_staff_shifts_break_non_negative'),
        sa.ForeignKeyConstraint(['staff_id'], ['restaurant_staff.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_staff_shifts_id'), 'staff_shifts', ['id'], unique=False)
    op.create_index('ix_staff_shifts_staff_date', 'staff_shifts', ['staff_id', 'shift_date'], unique=False)

    # Promotions
    op.create_table('promotional_campaigns',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('discount_type', sa.String(length=20), nullable=False),
        sa.Column('discount_value', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('minimum_order_amount', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('applicable_items', sa.JSON(), nullable=True),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('usage_limit', sa.Integer(), nullable=True),
        sa.Column('current_usage', sa.Integer(), nullable=False, server_default='0'),
        *timestamps(),
        sa.CheckConstraint("discount_type IN ('percentage', 'fixed_amount', 'buy_one_get_one')",
                           name='ck_promotional_campaigns_discount_type'),
        sa.CheckConstraint('end_date > start_date', name='ck_promotional_campaigns_dates'),
        sa.CheckConstraint('current_usage >= 0', name='ck_promotional_campaigns_usage_non_negative'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_promotional_campaigns_id'), 'promotional_campaigns', ['id'], unique=False)
    op.create_index(op.f('ix_promotional_campaigns_restaurant_id'), 'promotional_campaigns',
                    ['restaurant_id'], unique=False)
    op.create_index('ix_promotional_campaigns_restaurant_dates', 'promotional_campaigns',
                    ['restaurant_id', 'start_date', 'end_date'], unique=False)

    # Orders
    op.create_table('orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('customer_profile_id', sa.Integer(), nullable=True),
        sa.Column('table_id', sa.Integer(), nullable=True),
        sa.Column('customer_name', sa.String(length=200), nullable=True),
        sa.Column('customer_phone', sa.String(length=20), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('order_source', sa.String(length=20), nullable=False),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        sa.Column('subtotal', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('discount_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('total_amount', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('preparation_time', sa.Integer(), nullable=True),
        sa.Column('customer_rating', sa.Integer(), nullable=True),
        sa.Column('assigned_staff_id', sa.Integer(), nullable=True),
        sa.Column('served_by_staff_id', sa.Integer(), nullable=True),
        sa.Column('served_at', sa.DateTime(), nullable=True),
        sa.Column('loyalty_points_earned', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('loyalty_points_used', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('campaign_id', sa.Integer(), nullable=True),
        *timestamps(),
        sa.CheckConstraint('customer_rating >= 1 AND customer_rating <= 5', name='ck_orders_customer_rating'),
        sa.CheckConstraint('total_amount >= 0', name='ck_orders_total_non_negative'),
        sa.CheckConstraint('loyalty_points_used >= 0', name='ck_orders_points_used_non_negative'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['customer_profile_id'], ['customer_profiles.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['table_id'], ['tables.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['assigned_staff_id'], ['restaurant_staff.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['served_by_staff_id'], ['restaurant_staff.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['campaign_id'], ['promotional_campaigns.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_orders_id'), 'orders', ['id'], unique=False)
    op.create_index(op.f('ix_orders_restaurant_id'), 'orders', ['restaurant_id'], unique=False)
    op.create_index(op.f('ix_orders_customer_profile_id'), 'orders', ['customer_profile_id'], unique=False)
    op.create_index(op.f('ix_orders_status'), 'orders', ['status'], unique=False)
    op.create_index('ix_orders_restaurant_created', 'orders', ['restaurant_id', 'created_at'], unique=False)

    op.create_table('order_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('menu_item_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('unit_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('total_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        *timestamps(),
        sa.CheckConstraint('quantity > 0', name='ck_order_items_quantity_positive'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['menu_item_id'], ['menu_items.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_order_items_id'), 'order_items', ['id'], unique=False)
    op.create_index(op.f('ix_order_items_order_id'), 'order_items', ['order_id'], unique=False)
    op.create_index(op.f('ix_order_items_menu_item_id'), 'order_items', ['menu_item_id'], unique=False)

    op.create_table('order_item_modifiers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_item_id', sa.Integer(), nullable=False),
        sa.Column('modifier_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('price_adjustment', sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['order_item_id'], ['order_items.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['modifier_id'], ['menu_modifiers.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_order_item_modifiers_id'), 'order_item_modifiers', ['id'], unique=False)
    op.create_index(op.f('ix_order_item_modifiers_order_item_id'), 'order_item_modifiers',
                    ['order_item_id'], unique=False)

    op.create_table('order_notifications',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('notification_type', sa.String(length=30), nullable=False),
        sa.Column('recipient_type', sa.String(length=20), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('sent_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('read_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_order_notifications_id'), 'order_notifications', ['id'], unique=False)
    op.create_index(op.f('ix_order_notifications_restaurant_id'), 'order_notifications', ['restaurant_id'], unique=False)
    op.create_index(op.f('ix_order_notifications_order_id'), 'order_notifications', ['order_id'], unique=False)
    op.create_index('ix_order_notifications_restaurant_unread', 'order_notifications',
                    ['restaurant_id', 'is_read'], unique=False)

    # Loyalty
    op.create_table('loyalty_programs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('points_per_dollar', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('redemption_rate', sa.Numeric(precision=10, scale=4), nullable=False),
        sa.Column('minimum_redemption_points', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.CheckConstraint('points_per_dollar >= 0', name='ck_loyalty_programs_rate_non_negative'),
        sa.CheckConstraint('minimum_redemption_points >= 0', name='ck_loyalty_programs_min_points'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_loyalty_programs_id'), 'loyalty_programs', ['id'], unique=False)
    op.create_index(op.f('ix_loyalty_programs_restaurant_id'), 'loyalty_programs', ['restaurant_id'], unique=False)

    op.create_table('loyalty_points_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer_profile_id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=True),
        sa.Column('points_earned', sa.Integer(), nullable=False),
        sa.Column('points_used', sa.Integer(), nullable=False),
        sa.Column('points_balance_after', sa.Integer(), nullable=False),
        sa.Column('reason', sa.String(length=200), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(['customer_profile_id'], ['customer_profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_loyalty_points_transactions_id'), 'loyalty_points_transactions', ['id'], unique=False)
    op.create_index(op.f('ix_loyalty_points_transactions_customer_profile_id'), 'loyalty_points_transactions',
                    ['customer_profile_id'], unique=False)
    op.create_index(op.f('ix_loyalty_points_transactions_order_id'), 'loyalty_points_transactions',
                    ['order_id'], unique=False)
    op.create_index('ix_loyalty_points_transactions_profile_date', 'loyalty_points_transactions',
                    ['customer_profile_id', 'created_at'], unique=False)

    # Reservations
    op.create_table('table_reservations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('table_id', sa.Integer(), nullable=True),
        sa.Column('customer_profile_id', sa.Integer(), nullable=True),
        sa.Column('customer_name', sa.String(length=200), nullable=False),
        sa.Column('customer_phone', sa.String(length=20), nullable=True),
        sa.Column('customer_email', sa.String(length=255), nullable=True),
        sa.Column('party_size', sa.Integer(), nullable=False),
        sa.Column('reservation_date', sa.Date(), nullable=False),
        sa.Column('reservation_time', sa.Time(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=False),
        sa.Column('status', sa.Enum('pending', 'confirmed', 'seated', 'completed', 'cancelled', 'no_show',
                                    name='reservation_status'), nullable=False),
        sa.Column('confirmation_code', sa.String(length=20), nullable=True),
        sa.Column('special_requests', sa.Text(), nullable=True),
        *timestamps(),
        sa.CheckConstraint('party_size > 0', name='ck_table_reservations_party_size'),
        sa.CheckConstraint('duration_minutes > 0', name='ck_table_reservations_duration'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['table_id'], ['tables.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['customer_profile_id'], ['customer_profiles.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_table_reservations_id'), 'table_reservations', ['id'], unique=False)
    op.create_index(op.f('ix_table_reservations_restaurant_id'), 'table_reservations', ['restaurant_id'], unique=False)
    op.create_index(op.f('ix_table_reservations_table_id'), 'table_reservations', ['table_id'], unique=False)
    op.create_index(op.f('ix_table_reservations_reservation_date'), 'table_reservations',
                    ['reservation_date'], unique=False)
    op.create_index(op.f('ix_table_reservations_confirmation_code'), 'table_reservations',
                    ['confirmation_code'], unique=True)
    op.create_index('ix_table_reservations_restaurant_date', 'table_reservations',
                    ['restaurant_id', 'reservation_date'], unique=False)

    # Inventory
    op.create_table('suppliers',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('contact_person', sa.String(length=100), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_suppliers_id'), 'suppliers', ['id'], unique=False)
    op.create_index(op.f('ix_suppliers_restaurant_id'), 'suppliers', ['restaurant_id'], unique=False)
    op.create_index(op.f('ix_suppliers_name'), 'suppliers', ['name'], unique=False)

    op.create_table('inventory_items',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('supplier_id', sa.Integer(), nullable=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.Column('current_stock', sa.Numeric(precision=10, scale=3), nullable=False),
        sa.Column('minimum_stock', sa.Numeric(precision=10, scale=3), nullable=False),
        sa.Column('maximum_stock', sa.Numeric(precision=10, scale=3), nullable=True),
        sa.Column('unit_cost', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=True),
        sa.Column('storage_location', sa.String(length=100), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.CheckConstraint('current_stock >= 0', name='ck_inventory_items_stock_non_negative'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['supplier_id'], ['suppliers.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_inventory_items_id'), 'inventory_items', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_items_restaurant_id'), 'inventory_items', ['restaurant_id'], unique=False)
    op.create_index(op.f('ix_inventory_items_name'), 'inventory_items', ['name'], unique=False)
    op.create_index('ix_inventory_items_restaurant_active', 'inventory_items',
                    ['restaurant_id', 'is_active'], unique=False)

    op.create_table('menu_item_ingredients',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('menu_item_id', sa.Integer(), nullable=False),
        sa.Column('inventory_item_id', sa.Integer(), nullable=False),
        sa.Column('quantity_required', sa.Numeric(precision=10, scale=3), nullable=False),
        sa.Column('unit', sa.String(length=20), nullable=False),
        sa.CheckConstraint('quantity_required > 0', name='ck_menu_item_ingredients_quantity'),
        sa.ForeignKeyConstraint(['menu_item_id'], ['menu_items.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['inventory_item_id'], ['inventory_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_menu_item_ingredients_id'), 'menu_item_ingredients', ['id'], unique=False)
    op.create_index(op.f('ix_menu_item_ingredients_menu_item_id'), 'menu_item_ingredients',
                    ['menu_item_id'], unique=False)

    op.create_table('inventory_transactions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('inventory_item_id', sa.Integer(), nullable=False),
        sa.Column('transaction_type', sa.Enum('purchase', 'usage', 'waste', 'adjustment',
                                              name='inventory_transaction_type'), nullable=False),
        sa.Column('quantity', sa.Numeric(precision=10, scale=3), nullable=False),
        sa.Column('unit_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('total_cost', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('stock_after', sa.Numeric(precision=10, scale=3), nullable=False),
        sa.Column('reference_id', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.String(length=36), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['inventory_item_id'], ['inventory_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_inventory_transactions_id'), 'inventory_transactions', ['id'], unique=False)
    op.create_index(op.f('ix_inventory_transactions_inventory_item_id'), 'inventory_transactions',
                    ['inventory_item_id'], unique=False)

    # Analytics
    op.create_table('daily_sales_summary',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('total_orders', sa.Integer(), nullable=False),
        sa.Column('total_revenue', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('average_order_value', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('most_popular_item_id', sa.Integer(), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['most_popular_item_id'], ['menu_items.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('restaurant_id', 'date', name='uq_daily_sales_summary_restaurant_date')
    )
    op.create_index(op.f('ix_daily_sales_summary_id'), 'daily_sales_summary', ['id'], unique=False)
    op.create_index(op.f('ix_daily_sales_summary_date'), 'daily_sales_summary', ['date'], unique=False)

    op.create_table('menu_item_analytics',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('menu_item_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('times_ordered', sa.Integer(), nullable=False),
        sa.Column('total_quantity', sa.Integer(), nullable=False),
        sa.Column('total_revenue', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('average_rating', sa.Numeric(precision=3, scale=2), nullable=True),
        *timestamps(),
        sa.ForeignKeyConstraint(['menu_item_id'], ['menu_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('menu_item_id', 'date', name='uq_menu_item_analytics_item_date')
    )
    op.create_index(op.f('ix_menu_item_analytics_id'), 'menu_item_analytics', ['id'], unique=False)
    op.create_index(op.f('ix_menu_item_analytics_menu_item_id'), 'menu_item_analytics',
                    ['menu_item_id'], unique=False)
    op.create_index(op.f('ix_menu_item_analytics_date'), 'menu_item_analytics', ['date'], unique=False)

    op.create_table('customer_feedback',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('restaurant_id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=True),
        sa.Column('customer_name', sa.String(length=200), nullable=True),
        sa.Column('customer_email', sa.String(length=255), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('feedback_text', sa.Text(), nullable=True),
        sa.Column('feedback_type', sa.Enum('food', 'service', 'ambiance', 'overall',
                                           name='feedback_type'), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_customer_feedback_rating'),
        sa.ForeignKeyConstraint(['restaurant_id'], ['restaurants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_customer_feedback_id'), 'customer_feedback', ['id'], unique=False)
    op.create_index(op.f('ix_customer_feedback_restaurant_id'), 'customer_feedback', ['restaurant_id'], unique=False)


def downgrade():
    op.drop_table('customer_feedback')
    op.drop_table('menu_item_analytics')
    op.drop_table('daily_sales_summary')
    op.drop_table('inventory_transactions')
    op.drop_table('menu_item_ingredients')
    op.drop_table('inventory_items')
    op.drop_table('suppliers')
    op.drop_table('table_reservations')
    op.drop_table('loyalty_points_transactions')
    op.drop_table('loyalty_programs')
    op.drop_table('order_notifications')
    op.drop_table('order_item_modifiers')
    op.drop_table('order_items')
    op.drop_table('orders')
    op.drop_table('promotional_campaigns')
    op.drop_table('staff_shifts')
    op.drop_table('restaurant_staff')
    op.drop_table('staff_roles')
    op.drop_table('customer_profiles')
    op.drop_table('menu_item_modifiers')
    op.drop_table('menu_modifiers')
    op.drop_table('menu_items')
    op.drop_table('profiles')
    op.drop_table('tables')
    op.drop_table('restaurants')

    for enum_name in ('feedback_type', 'inventory_transaction_type', 'reservation_status',
                      'shift_status', 'table_status'):
        sa.Enum(name=enum_name).drop(op.get_bind(), checkfirst=True)
