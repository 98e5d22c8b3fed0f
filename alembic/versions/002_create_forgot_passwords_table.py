"""create forgot_passwords table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19 10:05:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "forgot_passwords",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("token", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_forgot_passwords_id", "forgot_passwords", ["id"], unique=False)
    op.create_index(
        "ix_forgot_passwords_email", "forgot_passwords", ["email"], unique=False
    )
    op.create_index(
        "ix_forgot_passwords_token", "forgot_passwords", ["token"], unique=True
    )


def downgrade() -> None:
    op.drop_index("ix_forgot_passwords_token", table_name="forgot_passwords")
    op.drop_index("ix_forgot_passwords_email", table_name="forgot_passwords")
    op.drop_index("ix_forgot_passwords_id", table_name="forgot_passwords")
    op.drop_table("forgot_passwords")
