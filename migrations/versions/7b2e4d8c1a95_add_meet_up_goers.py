"""add meet up goers

Revision ID: 7b2e4d8c1a95
Revises: 3f1c9a7d2b40
Create Date: 2026-10-02 21:15:07.402918

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "7b2e4d8c1a95"
down_revision = "3f1c9a7d2b40"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "meet_up_goers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("meet_up_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["meet_up_id"], ["meet_ups.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "meet_up_id", name="uq_meet_up_goers_user"),
    )


def downgrade():
    op.drop_table("meet_up_goers")
