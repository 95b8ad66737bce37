"""create customers, rentals and rental_items tables

Revision ID: a1c4e7f0b2d5
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "a1c4e7f0b2d5"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "customers",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("payment_token", sa.Text(), nullable=True),
        sa.Column("payment_token_last4", sa.String(length=4), nullable=True),
        sa.Column("payment_token_expiry", sa.String(length=10), nullable=True),
        sa.Column("payment_token_updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "rentals",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=True),
        sa.Column("customer_name", sa.String(length=255), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("overdue_daily_rate", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column("overdue_grace_days", sa.Integer(), nullable=True),
        sa.Column("auto_charge_enabled", sa.Boolean(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rentals_customer_id", "rentals", ["customer_id"])
    op.create_index("ix_rentals_end_date", "rentals", ["end_date"])
    op.create_index("ix_rentals_status", "rentals", ["status"])

    op.create_table(
        "rental_items",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("rental_id", sa.String(length=36), nullable=False),
        sa.Column("item_name", sa.String(length=255), nullable=False),
        sa.Column("item_category", sa.String(length=30), nullable=False),
        sa.Column("price_per_day", sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
            nullable=True,
        ),
        sa.ForeignKeyConstraint(["rental_id"], ["rentals.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_rental_items_rental_id", "rental_items", ["rental_id"])


def downgrade() -> None:
    op.drop_index("ix_rental_items_rental_id", table_name="rental_items")
    op.drop_table("rental_items")
    op.drop_index("ix_rentals_status", table_name="rentals")
    op.drop_index("ix_rentals_end_date", table_name="rentals")
    op.drop_index("ix_rentals_customer_id", table_name="rentals")
    op.drop_table("rentals")
    op.drop_table("customers")
