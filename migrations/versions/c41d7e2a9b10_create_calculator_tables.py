"""Create calculator profile and activity log tables

Revision ID: c41d7e2a9b10
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "c41d7e2a9b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "calculator_profile",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.String(length=36), nullable=False),
        sa.Column("theme", sa.String(length=10), nullable=False),
        sa.Column("history_json", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("modified_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    # Unique index doubles as the lookup index for a client's profile
    op.create_index(
        op.f("ix_calculator_profile_client_id"),
        "calculator_profile",
        ["client_id"],
        unique=True,
    )

    op.create_table(
        "log_entry",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
        sa.Column("client_id", sa.String(length=36), nullable=True),
        sa.Column("project", sa.String(length=50), nullable=True),
        sa.Column("category", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade():
    op.drop_table("log_entry")
    op.drop_index(op.f("ix_calculator_profile_client_id"), table_name="calculator_profile")
    op.drop_table("calculator_profile")
