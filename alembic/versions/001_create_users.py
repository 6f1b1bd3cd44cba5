"""Create users table with unique, indexed auth0_id.

Revision ID: 001_create_users
Revises: None
Create Date: 2025-01-01

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID

revision: str = "001_create_users"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True, server_default=sa.text("gen_random_uuid()")),
        sa.Column("auth0_id", sa.Text, nullable=False, unique=True),
        sa.Column("metadata", sa.JSON().with_variant(JSONB, "postgresql"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("auth0_id_idx", "users", ["auth0_id"])


def downgrade() -> None:
    op.drop_index("auth0_id_idx", table_name="users")
    op.drop_table("users")
