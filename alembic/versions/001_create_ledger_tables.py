"""Create messes, members, ledger records, subscriptions and archives.

Revision ID: 001_create_ledger_tables
Revises:
Create Date: 2026-10-17
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_create_ledger_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


mess_status_enum = sa.Enum("active", "inactive", "suspended", name="mess_status")
subscription_type_enum = sa.Enum("monthly", "yearly", name="subscription_type")
subscription_status_enum = sa.Enum(
    "active", "expired", "cancelled", name="subscription_status"
)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "messes",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("current_month", sa.String(length=7), nullable=False),
        sa.Column("status", mess_status_enum, nullable=False),
        sa.Column("suspend_reason", sa.String(length=280), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_messes_code"),
        sa.CheckConstraint(
            "length(current_month) = 7",
            name="ck_messes_current_month_format",
        ),
    )

    op.create_table(
        "members",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("mess_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("room_number", sa.String(length=32), nullable=True),
        sa.Column(
            "is_active",
            sa.Boolean(),
            nullable=False,
            server_default=sa.true(),
        ),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["mess_id"], ["messes.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_members_mess_id", "members", ["mess_id"])

    op.create_table(
        "meals",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("mess_id", sa.String(length=36), nullable=False),
        sa.Column("member_id", sa.String(length=36), nullable=False),
        sa.Column("meal_date", sa.Date(), nullable=False),
        sa.Column("breakfast", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("lunch", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dinner", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["mess_id"], ["messes.id"]),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("member_id", "meal_date", name="uq_meals_member_date"),
        sa.CheckConstraint(
            "breakfast >= 0 AND lunch >= 0 AND dinner >= 0",
            name="ck_meals_counts_non_negative",
        ),
    )
    op.create_index("ix_meals_mess_date", "meals", ["mess_id", "meal_date"])

    op.create_table(
        "bazars",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("mess_id", sa.String(length=36), nullable=False),
        sa.Column("member_id", sa.String(length=36), nullable=True),
        sa.Column("purchase_date", sa.Date(), nullable=False),
        sa.Column("cost", sa.Numeric(12, 2), nullable=False),
        sa.Column("person_name", sa.String(length=120), nullable=False),
        sa.Column("items", sa.String(length=500), nullable=True),
        sa.Column("note", sa.String(length=280), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["mess_id"], ["messes.id"]),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("cost > 0", name="ck_bazars_cost_positive"),
    )
    op.create_index("ix_bazars_mess_date", "bazars", ["mess_id", "purchase_date"])

    op.create_table(
        "deposits",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("mess_id", sa.String(length=36), nullable=False),
        sa.Column("member_id", sa.String(length=36), nullable=False),
        sa.Column("deposit_date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("note", sa.String(length=280), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["mess_id"], ["messes.id"]),
        sa.ForeignKeyConstraint(["member_id"], ["members.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("amount > 0", name="ck_deposits_amount_positive"),
    )
    op.create_index(
        "ix_deposits_mess_date", "deposits", ["mess_id", "deposit_date"]
    )

    op.create_table(
        "additional_costs",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("mess_id", sa.String(length=36), nullable=False),
        sa.Column("cost_date", sa.Date(), nullable=False),
        sa.Column("description", sa.String(length=280), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["mess_id"], ["messes.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "amount > 0", name="ck_additional_costs_amount_positive"
        ),
    )
    op.create_index(
        "ix_additional_costs_mess_date",
        "additional_costs",
        ["mess_id", "cost_date"],
    )

    op.create_table(
        "subscriptions",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("mess_id", sa.String(length=36), nullable=False),
        sa.Column("plan_type", subscription_type_enum, nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("status", subscription_status_enum, nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["mess_id"], ["messes.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "end_date >= start_date", name="ck_subscriptions_end_after_start"
        ),
    )
    op.create_index("ix_subscriptions_mess_id", "subscriptions", ["mess_id"])

    op.create_table(
        "monthly_archives",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("mess_id", sa.String(length=36), nullable=False),
        sa.Column("month", sa.String(length=7), nullable=False),
        sa.Column("meal_rate", sa.String(length=80), nullable=False),
        sa.Column("total_bazar", sa.String(length=80), nullable=False),
        sa.Column("total_meals", sa.Integer(), nullable=False),
        sa.Column("total_deposits", sa.String(length=80), nullable=False),
        sa.Column("total_additional_costs", sa.String(length=80), nullable=False),
        sa.Column("per_head_additional_cost", sa.String(length=80), nullable=False),
        sa.Column("members_data", sa.JSON(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["mess_id"], ["messes.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "mess_id", "month", name="uq_monthly_archives_mess_month"
        ),
    )


def downgrade() -> None:
    op.drop_table("monthly_archives")
    op.drop_index("ix_subscriptions_mess_id", table_name="subscriptions")
    op.drop_table("subscriptions")
    op.drop_index("ix_additional_costs_mess_date", table_name="additional_costs")
    op.drop_table("additional_costs")
    op.drop_index("ix_deposits_mess_date", table_name="deposits")
    op.drop_table("deposits")
    op.drop_index("ix_bazars_mess_date", table_name="bazars")
    op.drop_table("bazars")
    op.drop_index("ix_meals_mess_date", table_name="meals")
    op.drop_table("meals")
    op.drop_index("ix_members_mess_id", table_name="members")
    op.drop_table("members")
    op.drop_table("messes")

    bind = op.get_bind()
    subscription_status_enum.drop(bind, checkfirst=True)
    subscription_type_enum.drop(bind, checkfirst=True)
    mess_status_enum.drop(bind, checkfirst=True)
