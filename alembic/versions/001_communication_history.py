"""Communication history - one row per dispatch batch

Revision ID: 001
Revises: 
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "communication_history",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("appeal_id", sa.BigInteger(), nullable=False),
        sa.Column("trigger_type", sa.String(20), nullable=False),
        sa.Column("channel", sa.String(20), nullable=False),
        sa.Column("recipient_count", sa.Integer(), nullable=False),
        sa.Column("delivered_count", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("sent_by_user_id", sa.BigInteger(), nullable=True),
        sa.Column("sent_date", sa.DateTime(), nullable=False),
        sa.Column("error_message", sa.Text(), nullable=True),
    )

    # History for one appeal, newest first
    op.create_index(
        "ix_communication_history_appeal_sent",
        "communication_history",
        ["appeal_id", "sent_date"],
    )


def downgrade() -> None:
    op.drop_index("ix_communication_history_appeal_sent", table_name="communication_history")
    op.drop_table("communication_history")
