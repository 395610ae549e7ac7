"""create incentive schema

Revision ID: 1f3e5a7c9b21
Revises: 
Create Date: 2026-10-18 09:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '1f3e5a7c9b21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
        sa.Column("updated_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not inspector.has_table("stores"):
        op.create_table(
            "stores",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("location", sa.String(length=255), nullable=True),
            sa.Column("monthly_goal", sa.Integer(), nullable=True),
            *_timestamps(),
        )

    if not inspector.has_table("employees"):
        op.create_table(
            "employees",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("username", sa.String(length=100), nullable=False),
            sa.Column("full_name", sa.String(length=200), nullable=False),
            sa.Column("password_hash", sa.String(length=255), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=True),
            sa.Column("phone", sa.String(length=50), nullable=True),
            sa.Column("position", sa.String(length=100), nullable=True),
            sa.Column("department", sa.String(length=100), nullable=True),
            sa.Column("hire_date", sa.Date(), nullable=True),
            sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
            sa.Column("store_id", sa.Uuid(as_uuid=True), sa.ForeignKey("stores.id"), nullable=True),
            sa.Column("points_balance", sa.Integer(), server_default="0", nullable=False),
            sa.Column("total_earned_points", sa.Integer(), server_default="0", nullable=False),
            sa.Column("monthly_revenue_target", sa.Integer(), server_default="0", nullable=False),
            sa.Column("monthly_revenue_actual", sa.Integer(), server_default="0", nullable=False),
            sa.Column("manual_revenue_override", sa.Boolean(), server_default=sa.false(), nullable=False),
            sa.Column("bonus_revenue_value", sa.Integer(), nullable=True),
            sa.Column("bonus_revenue_type", sa.String(length=10), nullable=True),
            *_timestamps(),
            sa.UniqueConstraint("username", name="uq_employees_username"),
        )

    if not inspector.has_table("events_settings"):
        op.create_table(
            "events_settings",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=200), nullable=False),
            sa.Column("points", sa.Integer(), nullable=False),
            sa.Column("event_type", sa.String(length=20), nullable=False),
            sa.Column("is_enabled", sa.Boolean(), server_default=sa.true(), nullable=False),
            sa.Column("sort_order", sa.Integer(), nullable=True),
            *_timestamps(),
        )

    if not inspector.has_table("employee_events"):
        op.create_table(
            "employee_events",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
            sa.Column("event_type", sa.String(length=200), nullable=False),
            sa.Column("event_type_id", sa.Uuid(as_uuid=True), sa.ForeignKey("events_settings.id"), nullable=True),
            sa.Column("points", sa.Integer(), nullable=False),
            sa.Column("transaction_type", sa.String(length=20), server_default="EVENT", nullable=False),
            sa.Column("description", sa.String(length=1000), nullable=True),
            sa.Column("notes", sa.String(length=1000), nullable=True),
            sa.Column("created_by", sa.String(length=100), nullable=True),
            sa.Column("source_id", sa.Uuid(as_uuid=True), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
        )

    if not inspector.has_table("employee_requests"):
        op.create_table(
            "employee_requests",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
            sa.Column("request_type", sa.String(length=20), nullable=False),
            sa.Column("event_type", sa.String(length=200), nullable=False),
            sa.Column("description", sa.String(length=1000), nullable=True),
            sa.Column("points", sa.Integer(), nullable=False),
            sa.Column("amount", sa.Integer(), nullable=True),
            sa.Column("status", sa.String(length=20), server_default="pending", nullable=False),
            sa.Column("notes", sa.String(length=1000), nullable=True),
            sa.Column("approved_at", sa.TIMESTAMP(), nullable=True),
            sa.Column("approved_by", sa.String(length=100), nullable=True),
            *_timestamps(),
        )

    if not inspector.has_table("rewards_catalog"):
        op.create_table(
            "rewards_catalog",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("name", sa.String(length=100), nullable=False),
            sa.Column("description", sa.String(length=255), nullable=True),
            sa.Column("category", sa.String(length=50), server_default="general", nullable=False),
            sa.Column("type", sa.String(length=50), nullable=True),
            sa.Column("icon", sa.String(length=50), nullable=True),
            sa.Column("points_cost", sa.Integer(), nullable=False),
            sa.Column("stock", sa.Integer(), nullable=True),
            sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
            *_timestamps(),
        )

    if not inspector.has_table("reward_redemptions"):
        op.create_table(
            "reward_redemptions",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
            sa.Column("reward_id", sa.Uuid(as_uuid=True), sa.ForeignKey("rewards_catalog.id"), nullable=True),
            sa.Column("reward_name", sa.String(length=100), nullable=False),
            sa.Column("points_cost", sa.Integer(), nullable=False),
            sa.Column("status", sa.String(length=20), server_default="pending", nullable=False),
            sa.Column("version", sa.Integer(), server_default="1", nullable=False),
            sa.Column("notes", sa.String(length=1000), nullable=True),
            sa.Column("manager_comment", sa.String(length=1000), nullable=True),
            sa.Column("delivered_code", sa.String(length=255), nullable=True),
            sa.Column("approved_at", sa.TIMESTAMP(), nullable=True),
            sa.Column("approved_by", sa.String(length=100), nullable=True),
            sa.Column("decided_at", sa.TIMESTAMP(), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
        )

    if not inspector.has_table("weekly_revenue"):
        op.create_table(
            "weekly_revenue",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
            sa.Column("week_start_date", sa.Date(), nullable=False),
            sa.Column("revenue_amount", sa.Integer(), server_default="0", nullable=False),
            sa.Column("spillover_amount", sa.Integer(), server_default="0", nullable=False),
            *_timestamps(),
            sa.UniqueConstraint("employee_id", "week_start_date", name="uq_weekly_revenue_employee_week"),
        )

    if not inspector.has_table("daily_revenue"):
        op.create_table(
            "daily_revenue",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
            sa.Column("date", sa.Date(), nullable=False),
            sa.Column("revenue_amount", sa.Integer(), server_default="0", nullable=False),
            sa.Column("notes", sa.String(length=1000), nullable=True),
            *_timestamps(),
            sa.UniqueConstraint("employee_id", "date", name="uq_daily_revenue_employee_date"),
        )

    if not inspector.has_table("monthly_revenue_summary"):
        op.create_table(
            "monthly_revenue_summary",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
            sa.Column("year", sa.Integer(), nullable=False),
            sa.Column("month", sa.Integer(), nullable=False),
            sa.Column("total_revenues", sa.Integer(), server_default="0", nullable=False),
            sa.Column("weeks_count", sa.Integer(), server_default="0", nullable=False),
            sa.Column("days_count", sa.Integer(), server_default="0", nullable=False),
            *_timestamps(),
            sa.UniqueConstraint("employee_id", "year", "month", name="uq_monthly_revenue_employee_period"),
        )

    if not inspector.has_table("employee_feedback"):
        op.create_table(
            "employee_feedback",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
            sa.Column("from_employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=True),
            sa.Column("feedback_type", sa.String(length=20), server_default="kudos", nullable=False),
            sa.Column("title", sa.String(length=200), nullable=False),
            sa.Column("message", sa.String(length=2000), nullable=False),
            sa.Column("category", sa.String(length=50), nullable=True),
            sa.Column("rating", sa.Integer(), nullable=True),
            sa.Column("status", sa.String(length=20), nullable=True),
            sa.Column("approved_at", sa.TIMESTAMP(), nullable=True),
            sa.Column("approved_by", sa.String(length=100), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
        )

    if not inspector.has_table("bonus_requests"):
        op.create_table(
            "bonus_requests",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
            sa.Column("year", sa.Integer(), nullable=False),
            sa.Column("month", sa.Integer(), nullable=False),
            sa.Column("bonus_value", sa.Integer(), nullable=False),
            sa.Column("bonus_type", sa.String(length=10), nullable=False),
            sa.Column("status", sa.String(length=20), server_default="pending", nullable=False),
            sa.Column("notes", sa.String(length=1000), nullable=True),
            sa.Column("approved_at", sa.TIMESTAMP(), nullable=True),
            sa.Column("approved_by", sa.String(length=100), nullable=True),
            *_timestamps(),
            sa.UniqueConstraint("employee_id", "year", "month", name="uq_bonus_requests_employee_period"),
        )

    if not inspector.has_table("notifications"):
        op.create_table(
            "notifications",
            sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True, nullable=False),
            sa.Column("employee_id", sa.Uuid(as_uuid=True), sa.ForeignKey("employees.id"), nullable=False),
            sa.Column("title", sa.String(length=200), nullable=False),
            sa.Column("message", sa.String(length=2000), nullable=False),
            sa.Column("type", sa.String(length=20), server_default="info", nullable=False),
            sa.Column("priority", sa.String(length=20), server_default="normal", nullable=False),
            sa.Column("status", sa.String(length=20), server_default="sent", nullable=False),
            sa.Column("action_url", sa.String(length=500), nullable=True),
            sa.Column("created_by", sa.String(length=100), nullable=True),
            sa.Column("read_at", sa.TIMESTAMP(), nullable=True),
            sa.Column("created_at", sa.TIMESTAMP(), server_default=sa.text("now()"), nullable=True),
        )

    inspector = sa.inspect(bind)
    for table, name, cols in (
        ("employee_events", "ix_employee_events_employee_id", ["employee_id"]),
        ("employee_requests", "ix_employee_requests_employee_id", ["employee_id"]),
        ("reward_redemptions", "ix_reward_redemptions_employee_id", ["employee_id"]),
        ("employee_feedback", "ix_employee_feedback_employee_id", ["employee_id"]),
        ("notifications", "ix_notifications_employee_id", ["employee_id"]),
    ):
        existing_indexes = {ix["name"] for ix in inspector.get_indexes(table)}
        if name not in existing_indexes:
            op.create_index(name, table, cols)


def downgrade() -> None:
    """Downgrade schema."""
    for table in (
        "notifications",
        "bonus_requests",
        "employee_feedback",
        "monthly_revenue_summary",
        "daily_revenue",
        "weekly_revenue",
        "reward_redemptions",
        "rewards_catalog",
        "employee_requests",
        "employee_events",
        "events_settings",
        "employees",
        "stores",
    ):
        op.drop_table(table)
