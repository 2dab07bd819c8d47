"""Initial schema: months, weeks, providers and payments."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

from credit_tracker.app.db_types import GUID, Money


revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "months",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(length=50), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("total_credit", Money(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
        sa.CheckConstraint("year >= 2020 AND year <= 2030", name="ck_months_year_range"),
        sa.CheckConstraint("total_credit >= 0", name="ck_months_total_credit_non_negative"),
    )

    op.create_table(
        "providers",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("contact_info", sa.String(length=200), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    op.create_table(
        "weeks",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column(
            "month_id",
            GUID(),
            sa.ForeignKey("months.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("week_number", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("credit_amount", Money(), nullable=False, server_default=sa.text("0")),
        *_timestamps(),
        sa.UniqueConstraint("month_id", "week_number", name="uq_weeks_month_week_number"),
        sa.CheckConstraint("week_number >= 1", name="ck_weeks_week_number_positive"),
        sa.CheckConstraint("end_date >= start_date", name="ck_weeks_valid_range"),
        sa.CheckConstraint("credit_amount >= 0", name="ck_weeks_credit_amount_non_negative"),
    )
    op.create_index("weeks_month_idx", "weeks", ["month_id"])

    op.create_table(
        "payments",
        sa.Column("id", GUID(), primary_key=True),
        sa.Column(
            "week_id",
            GUID(),
            sa.ForeignKey("weeks.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column(
            "provider_id",
            GUID(),
            sa.ForeignKey("providers.id", ondelete="RESTRICT"),
            nullable=False,
        ),
        sa.Column("amount", Money(), nullable=False),
        sa.Column("payment_date", sa.Date(), nullable=False),
        sa.Column("description", sa.String(length=200), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("amount > 0", name="ck_payments_amount_positive"),
        sa.CheckConstraint("amount <= 999999.99", name="ck_payments_amount_max"),
    )
    op.create_index("payments_week_idx", "payments", ["week_id"])
    op.create_index(
        "payments_provider_date_idx", "payments", ["provider_id", "payment_date"]
    )


def downgrade() -> None:
    op.drop_index("payments_provider_date_idx", table_name="payments")
    op.drop_index("payments_week_idx", table_name="payments")
    op.drop_table("payments")
    op.drop_index("weeks_month_idx", table_name="weeks")
    op.drop_table("weeks")
    op.drop_table("providers")
    op.drop_table("months")
