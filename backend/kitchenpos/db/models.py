"""
Canonical relational database models for kitchenpos.

These models represent the full relational schema and are used by Alembic
for migration generation. They are kept separate from the domain entities;
the SQLAlchemy storage adapter maps between the two.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric, ForeignKey, Index
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class ProductModel(Base):
    """Sellable product with a unit price."""

    __tablename__ = "product"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(19, 2), nullable=False)

    def __repr__(self):
        return f"<Product(id={self.id}, name={self.name}, price={self.price})>"


class MenuGroupModel(Base):
    """Grouping of menus (e.g. "set menus")."""

    __tablename__ = "menu_group"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    menus = relationship("MenuModel", back_populates="menu_group")

    def __repr__(self):
        return f"<MenuGroup(id={self.id}, name={self.name})>"


class MenuModel(Base):
    """Menu sold to customers, composed of products."""

    __tablename__ = "menu"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(19, 2), nullable=False)
    menu_group_id = Column(Integer, ForeignKey("menu_group.id"), nullable=False, index=True)

    menu_group = relationship("MenuGroupModel", back_populates="menus")
    menu_products = relationship("MenuProductModel", back_populates="menu", order_by="MenuProductModel.seq")

    def __repr__(self):
        return f"<Menu(id={self.id}, name={self.name}, price={self.price})>"


class MenuProductModel(Base):
    """Product and quantity within a menu."""

    __tablename__ = "menu_product"

    seq = Column(Integer, primary_key=True, index=True)
    menu_id = Column(Integer, ForeignKey("menu.id"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("product.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)

    menu = relationship("MenuModel", back_populates="menu_products")

    def __repr__(self):
        return f"<MenuProduct(seq={self.seq}, menu_id={self.menu_id}, product_id={self.product_id})>"


class TableGroupModel(Base):
    """Association of two or more order tables."""

    __tablename__ = "table_group"

    id = Column(Integer, primary_key=True, index=True)
    created_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    order_tables = relationship("OrderTableModel", back_populates="table_group", order_by="OrderTableModel.id")

    def __repr__(self):
        return f"<TableGroup(id={self.id}, created_date={self.created_date})>"


class OrderTableModel(Base):
    """Physical table in the restaurant."""

    __tablename__ = "order_table"

    id = Column(Integer, primary_key=True, index=True)
    table_group_id = Column(Integer, ForeignKey("table_group.id"), nullable=True, index=True)
    number_of_guests = Column(Integer, nullable=False, default=0)
    empty = Column(Boolean, nullable=False, default=True)

    table_group = relationship("TableGroupModel", back_populates="order_tables")
    orders = relationship("OrderModel", back_populates="order_table")

    def __repr__(self):
        return f"<OrderTable(id={self.id}, guests={self.number_of_guests}, empty={self.empty})>"


class OrderModel(Base):
    """Order placed from a table."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_table_id = Column(Integer, ForeignKey("order_table.id"), nullable=False, index=True)
    order_status = Column(String(255), nullable=False)  # COOKING, MEAL, COMPLETION
    ordered_time = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("idx_orders_table_status", "order_table_id", "order_status"),
    )

    order_table = relationship("OrderTableModel", back_populates="orders")
    order_line_items = relationship("OrderLineItemModel", back_populates="order", order_by="OrderLineItemModel.seq")

    def __repr__(self):
        return f"<Order(id={self.id}, order_table_id={self.order_table_id}, status={self.order_status})>"


class OrderLineItemModel(Base):
    """Menu and quantity within an order."""

    __tablename__ = "order_line_item"

    seq = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    menu_id = Column(Integer, ForeignKey("menu.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)

    order = relationship("OrderModel", back_populates="order_line_items")

    def __repr__(self):
        return f"<OrderLineItem(seq={self.seq}, order_id={self.order_id}, menu_id={self.menu_id})>"
