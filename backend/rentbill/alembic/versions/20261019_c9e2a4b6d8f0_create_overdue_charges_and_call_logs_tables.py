"""create overdue_charges and call_logs tables

Revision ID: c9e2a4b6d8f0
Revises: b5d8f1a3c6e9
Create Date: 2026-10-19 09:20:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "c9e2a4b6d8f0"
down_revision = "b5d8f1a3c6e9"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "overdue_charges",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("rental_id", sa.String(length=36), nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=True),
        sa.Column("charge_date", sa.Date(), nullable=False),
        sa.Column("days_overdue", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column("currency", sa.String(length=3), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("transaction_id", sa.String(length=255), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
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
        sa.ForeignKeyConstraint(["rental_id"], ["rentals.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("rental_id", "charge_date", name="uq_overdue_charge_rental_day"),
    )
    op.create_index("ix_overdue_charges_rental_id", "overdue_charges", ["rental_id"])
    op.create_index("ix_overdue_charges_customer_id", "overdue_charges", ["customer_id"])
    op.create_index("ix_overdue_charges_charge_date", "overdue_charges", ["charge_date"])

    op.create_table(
        "call_logs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("entity_type", sa.String(length=20), nullable=False),
        sa.Column("entity_id", sa.String(length=36), nullable=False),
        sa.Column("customer_id", sa.String(length=36), nullable=True),
        sa.Column("customer_phone", sa.String(length=50), nullable=False),
        sa.Column("call_status", sa.String(length=20), nullable=False),
        sa.Column("call_type", sa.String(length=20), nullable=False),
        sa.Column("call_date", sa.Date(), nullable=False),
        sa.Column("call_message", sa.Text(), nullable=True),
        sa.Column("campaign_id", sa.String(length=100), nullable=True),
        sa.Column("error_message", sa.Text(), nullable=True),
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
        sa.UniqueConstraint(
            "entity_type",
            "entity_id",
            "call_date",
            "call_type",
            name="uq_call_log_entity_day_type",
        ),
    )
    op.create_index("ix_call_logs_entity_id", "call_logs", ["entity_id"])
    op.create_index("ix_call_logs_customer_id", "call_logs", ["customer_id"])
    op.create_index("ix_call_logs_call_date", "call_logs", ["call_date"])
    op.create_index("ix_call_logs_campaign_id", "call_logs", ["campaign_id"])


def downgrade() -> None:
    op.drop_index("ix_call_logs_campaign_id", table_name="call_logs")
    op.drop_index("ix_call_logs_call_date", table_name="call_logs")
    op.drop_index("ix_call_logs_customer_id", table_name="call_logs")
    op.drop_index("ix_call_logs_entity_id", table_name="call_logs")
    op.drop_table("call_logs")
    op.drop_index("ix_overdue_charges_charge_date", table_name="overdue_charges")
    op.drop_index("ix_overdue_charges_customer_id", table_name="overdue_charges")
    op.drop_index("ix_overdue_charges_rental_id", table_name="overdue_charges")
    op.drop_table("overdue_charges")
