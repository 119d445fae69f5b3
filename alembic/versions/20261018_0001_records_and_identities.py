"""Record store and identity tables

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Creates:
- records: JSON records grouped by collection (users, properties, documents)
- identities: sign-in identities looked up by email
"""
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create record store and identity tables."""

    # records - schemaless entities keyed by (collection, record_id)
    op.create_table(
        "records",
        sa.Column("collection", sa.String(64), nullable=False),
        sa.Column("record_id", sa.String(128), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("collection", "record_id"),
    )
    op.create_index("ix_records_collection", "records", ["collection"])

    # identities - accounts known to the authentication service
    op.create_table(
        "identities",
        sa.Column("uid", sa.String(128), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(120), nullable=True),
        sa.Column("role", sa.String(32), nullable=True),
        sa.Column("disabled", sa.Boolean(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("uid"),
    )
    op.create_index("ix_identities_email", "identities", ["email"], unique=True)


def downgrade() -> None:
    """Drop record store and identity tables."""
    op.drop_index("ix_identities_email", table_name="identities")
    op.drop_table("identities")
    op.drop_index("ix_records_collection", table_name="records")
    op.drop_table("records")
