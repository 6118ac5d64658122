"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Schema:
- movie / screen: catalog rows shows point at
- seat_layout: one JSON layout per screen ({"<category>": {"rows": [...], "seatsPerRow": n}})
- blocked_seat: seats a screen never sells
- show / seat_pricing: scheduled shows and their per-category prices
- booking / booked_seat / payment: reservations, seat claims and payment attempts
- snack / food_order: F&B catalog and items attached to bookings

booked_seat carries a partial unique index over (show_id, seat_label) for rows
still claiming the seat (held or confirmed); it is what keeps two concurrent
bookings from both taking a seat.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LIVE_CLAIM_PREDICATE = "status IN ('held', 'confirmed')"


def _created_at() -> sa.Column:
    return sa.Column(
        'created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        'updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
    )


def upgrade() -> None:
    """Create all tables with final schema."""

    # ========== STEP 1: Catalog ==========

    op.create_table(
        'movie',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('language', sa.String(length=50), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint('id', name='pk_movie'),
    )

    op.create_table(
        'screen',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('theater_name', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint('id', name='pk_screen'),
    )

    op.create_table(
        'seat_layout',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('screen_id', sa.Integer(), nullable=False),
        sa.Column('layout_data', sa.JSON(), nullable=False),
        sa.ForeignKeyConstraint(
            ['screen_id'], ['screen.id'], name='fk_seat_layout_screen_id_screen'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_seat_layout'),
        sa.UniqueConstraint('screen_id', name='uq_seat_layout_screen_id'),
    )

    op.create_table(
        'blocked_seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('screen_id', sa.Integer(), nullable=False),
        sa.Column('seat_row', sa.String(length=2), nullable=False),
        sa.Column('seat_number', sa.Integer(), nullable=False),
        sa.Column('is_blocked', sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ['screen_id'], ['screen.id'], name='fk_blocked_seat_screen_id_screen'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_blocked_seat'),
        sa.UniqueConstraint('screen_id', 'seat_row', 'seat_number', name='uq_blocked_seat'),
    )
    op.create_index('ix_blocked_seat_screen_id', 'blocked_seat', ['screen_id'])

    # ========== STEP 2: Shows and pricing ==========

    op.create_table(
        'show',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.Integer(), nullable=False),
        sa.Column('screen_id', sa.Integer(), nullable=False),
        sa.Column('show_date', sa.Date(), nullable=False),
        sa.Column('show_time', sa.Time(), nullable=False),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('format', sa.String(length=20), nullable=True),
        sa.Column('language', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        _created_at(),
        _updated_at(),
        sa.ForeignKeyConstraint(['movie_id'], ['movie.id'], name='fk_show_movie_id_movie'),
        sa.ForeignKeyConstraint(['screen_id'], ['screen.id'], name='fk_show_screen_id_screen'),
        sa.PrimaryKeyConstraint('id', name='pk_show'),
    )
    op.create_index('ix_show_movie_id', 'show', ['movie_id'])
    op.create_index('ix_show_screen_id', 'show', ['screen_id'])

    op.create_table(
        'seat_pricing',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('show_id', sa.Integer(), nullable=False),
        sa.Column('seat_category', sa.String(length=50), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.ForeignKeyConstraint(
            ['show_id'], ['show.id'], name='fk_seat_pricing_show_id_show', ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_seat_pricing'),
        sa.UniqueConstraint('show_id', 'seat_category', name='uq_seat_pricing_category'),
    )
    op.create_index('ix_seat_pricing_show_id', 'seat_pricing', ['show_id'])

    # ========== STEP 3: Bookings, seat claims, payments ==========

    op.create_table(
        'booking',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_reference', sa.String(length=20), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('show_id', sa.Integer(), nullable=False),
        sa.Column('total_amount', sa.Numeric(14, 4), nullable=False),
        sa.Column('booking_status', sa.String(length=20), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False),
        sa.Column('user_email', sa.String(length=255), nullable=False),
        sa.Column('user_mobile', sa.String(length=20), nullable=False),
        sa.Column(
            'booked_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        _updated_at(),
        sa.ForeignKeyConstraint(['show_id'], ['show.id'], name='fk_booking_show_id_show'),
        sa.PrimaryKeyConstraint('id', name='pk_booking'),
        sa.UniqueConstraint('booking_reference', name='uq_booking_booking_reference'),
    )
    op.create_index('ix_booking_user_id', 'booking', ['user_id'])
    op.create_index('ix_booking_show_id', 'booking', ['show_id'])

    op.create_table(
        'booked_seat',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('show_id', sa.Integer(), nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('seat_label', sa.String(length=5), nullable=False),
        sa.Column('seat_category', sa.String(length=50), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('held_until', sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(['show_id'], ['show.id'], name='fk_booked_seat_show_id_show'),
        sa.ForeignKeyConstraint(
            ['booking_id'], ['booking.id'], name='fk_booked_seat_booking_id_booking'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_booked_seat'),
    )
    op.create_index('ix_booked_seat_booking_id', 'booked_seat', ['booking_id'])
    op.create_index('ix_booked_seat_show_label', 'booked_seat', ['show_id', 'seat_label'])
    op.create_index(
        'uq_booked_seat_live_claim',
        'booked_seat',
        ['show_id', 'seat_label'],
        unique=True,
        postgresql_where=sa.text(LIVE_CLAIM_PREDICATE),
        sqlite_where=sa.text(LIVE_CLAIM_PREDICATE),
    )

    op.create_table(
        'payment',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=False),
        sa.Column('transaction_id', sa.String(length=20), nullable=False),
        sa.Column('amount', sa.Numeric(14, 4), nullable=False),
        sa.Column('payment_method', sa.String(length=30), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('breakdown', sa.JSON(), nullable=False),
        _created_at(),
        _updated_at(),
        sa.ForeignKeyConstraint(
            ['booking_id'], ['booking.id'], name='fk_payment_booking_id_booking'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_payment'),
        sa.UniqueConstraint('transaction_id', name='uq_payment_transaction_id'),
    )
    op.create_index('ix_payment_booking_id', 'payment', ['booking_id'])

    # ========== STEP 4: Food and beverages ==========

    op.create_table(
        'snack',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_snack'),
    )

    op.create_table(
        'food_order',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('booking_id', sa.Integer(), nullable=False),
        sa.Column('snack_id', sa.Integer(), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price_at_order', sa.Numeric(10, 2), nullable=False),
        sa.ForeignKeyConstraint(
            ['booking_id'], ['booking.id'], name='fk_food_order_booking_id_booking'
        ),
        sa.ForeignKeyConstraint(['snack_id'], ['snack.id'], name='fk_food_order_snack_id_snack'),
        sa.PrimaryKeyConstraint('id', name='pk_food_order'),
    )
    op.create_index('ix_food_order_booking_id', 'food_order', ['booking_id'])


def downgrade() -> None:
    """Drop all tables in reverse order of creation (indexes dropped with them)."""
    op.drop_table('food_order')
    op.drop_table('snack')
    op.drop_table('payment')
    op.drop_table('booked_seat')
    op.drop_table('booking')
    op.drop_table('seat_pricing')
    op.drop_table('show')
    op.drop_table('blocked_seat')
    op.drop_table('seat_layout')
    op.drop_table('screen')
    op.drop_table('movie')
