"""Initial schema: admin_users, products, news, code_sequences.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Initial admin (created by app startup from ADMIN_USERNAME / ADMIN_PASSWORD).
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
        "admin_users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_admin_users_username", "admin_users", ["username"], unique=True)

    op.create_table(
        "products",
        sa.Column("id", sa.String(10), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("brand", sa.String(50), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("imageUrl1", sa.String(255), nullable=True),
        sa.Column("imageUrl2", sa.String(255), nullable=True),
        sa.Column("imageUrl3", sa.String(255), nullable=True),
        sa.Column("imageUrl4", sa.String(255), nullable=True),
        sa.Column("mainImageIndex", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("originalPrice", sa.Numeric(10, 2), nullable=False),
        sa.Column("salePrice", sa.Numeric(10, 2), nullable=False),
        sa.Column("material", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_products_brand", "products", ["brand"])
    op.create_index("ix_products_type", "products", ["type"])

    op.create_table(
        "news",
        sa.Column("id", sa.String(10), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("imageUrl", sa.String(255), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False, server_default="0"),
    )

    op.create_table(
        "code_sequences",
        sa.Column("prefix", sa.String(10), primary_key=True),
        sa.Column("last_value", sa.Integer(), nullable=False, server_default="0"),
    )


def downgrade() -> None:
    op.drop_table("code_sequences")
    op.drop_table("news")
    op.drop_index("ix_products_type", table_name="products")
    op.drop_index("ix_products_brand", table_name="products")
    op.drop_table("products")
    op.drop_index("ix_admin_users_username", table_name="admin_users")
    op.drop_table("admin_users")
