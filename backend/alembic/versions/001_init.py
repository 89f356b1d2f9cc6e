"""init kitchenpos schema

Revision ID: 001_init
Revises:
Create Date: 2026-10-19 00:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "001_init"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "product",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(19, 2), nullable=False),
    )
    op.create_index("ix_product_id", "product", ["id"])

    op.create_table(
        "menu_group",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
    )
    op.create_index("ix_menu_group_id", "menu_group", ["id"])

    op.create_table(
        "menu",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("price", sa.Numeric(19, 2), nullable=False),
        sa.Column("menu_group_id", sa.Integer(), sa.ForeignKey("menu_group.id"), nullable=False),
    )
    op.create_index("ix_menu_id", "menu", ["id"])
    op.create_index("ix_menu_menu_group_id", "menu", ["menu_group_id"])

    op.create_table(
        "menu_product",
        sa.Column("seq", sa.Integer(), primary_key=True),
        sa.Column("menu_id", sa.Integer(), sa.ForeignKey("menu.id"), nullable=False),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("product.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
    )
    op.create_index("ix_menu_product_seq", "menu_product", ["seq"])
    op.create_index("ix_menu_product_menu_id", "menu_product", ["menu_id"])
    op.create_index("ix_menu_product_product_id", "menu_product", ["product_id"])

    op.create_table(
        "table_group",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("created_date", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_table_group_id", "table_group", ["id"])

    op.create_table(
        "order_table",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("table_group_id", sa.Integer(), sa.ForeignKey("table_group.id"), nullable=True),
        sa.Column("number_of_guests", sa.Integer(), nullable=False),
        sa.Column("empty", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_order_table_id", "order_table", ["id"])
    op.create_index("ix_order_table_table_group_id", "order_table", ["table_group_id"])

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("order_table_id", sa.Integer(), sa.ForeignKey("order_table.id"), nullable=False),
        sa.Column("order_status", sa.String(length=255), nullable=False),
        sa.Column("ordered_time", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_orders_id", "orders", ["id"])
    op.create_index("ix_orders_order_table_id", "orders", ["order_table_id"])
    op.create_index("idx_orders_table_status", "orders", ["order_table_id", "order_status"])

    op.create_table(
        "order_line_item",
        sa.Column("seq", sa.Integer(), primary_key=True),
        sa.Column("order_id", sa.Integer(), sa.ForeignKey("orders.id"), nullable=False),
        sa.Column("menu_id", sa.Integer(), sa.ForeignKey("menu.id"), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False),
    )
    op.create_index("ix_order_line_item_seq", "order_line_item", ["seq"])
    op.create_index("ix_order_line_item_order_id", "order_line_item", ["order_id"])
    op.create_index("ix_order_line_item_menu_id", "order_line_item", ["menu_id"])


def downgrade() -> None:
    op.drop_table("order_line_item")
    op.drop_table("orders")
    op.drop_table("order_table")
    op.drop_table("table_group")
    op.drop_table("menu_product")
    op.drop_table("menu")
    op.drop_table("menu_group")
    op.drop_table("product")
