"""
SQLAlchemy storage implementation for kitchenpos.

Repositories work on a Session bound to one unit of work and map ORM rows
from kitchenpos.db.models to the frozen domain entities.
"""

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Optional

from sqlalchemy import create_engine, select, delete, func, exists
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from kitchenpos.storage.base import (
    MenuGroupRepository,
    MenuProductRepository,
    MenuRepository,
    OrderLineItemRepository,
    OrderRepository,
    OrderTableRepository,
    ProductRepository,
    Storage,
    TableGroupRepository,
    UnitOfWork,
)
from kitchenpos.db import init_db
from kitchenpos.db.models import (
    Base,
    MenuGroupModel,
    MenuModel,
    MenuProductModel,
    OrderLineItemModel,
    OrderModel,
    OrderTableModel,
    ProductModel,
    TableGroupModel,
)
from kitchenpos.domain import (
    Menu,
    MenuGroup,
    MenuProduct,
    Order,
    OrderLineItem,
    OrderStatus,
    OrderTable,
    Product,
    TableGroup,
)

logger = logging.getLogger(__name__)


# ---------- Row <-> entity mapping ----------

def _product(row: ProductModel) -> Product:
    return Product(id=row.id, name=row.name, price=row.price)


def _menu_group(row: MenuGroupModel) -> MenuGroup:
    return MenuGroup(id=row.id, name=row.name)


def _menu(row: MenuModel) -> Menu:
    return Menu(id=row.id, name=row.name, price=row.price, menu_group_id=row.menu_group_id)


def _menu_product(row: MenuProductModel) -> MenuProduct:
    return MenuProduct(
        seq=row.seq, menu_id=row.menu_id, product_id=row.product_id, quantity=row.quantity
    )


def _order(row: OrderModel) -> Order:
    return Order(
        id=row.id,
        order_table_id=row.order_table_id,
        order_status=OrderStatus(row.order_status),
        ordered_time=row.ordered_time,
    )


def _order_line_item(row: OrderLineItemModel) -> OrderLineItem:
    return OrderLineItem(
        seq=row.seq, order_id=row.order_id, menu_id=row.menu_id, quantity=row.quantity
    )


def _order_table(row: OrderTableModel) -> OrderTable:
    return OrderTable(
        id=row.id,
        table_group_id=row.table_group_id,
        number_of_guests=row.number_of_guests,
        empty=row.empty,
    )


def _table_group(row: TableGroupModel) -> TableGroup:
    return TableGroup(
        id=row.id,
        created_date=row.created_date,
        order_tables=tuple(_order_table(t) for t in row.order_tables),
    )


def _upsert(session: Session, model, key: Optional[int], **values):
    """Insert a new row (key is None) or update the existing one; flushes."""
    if key is None:
        row = model(**values)
        session.add(row)
    else:
        row = session.get(model, key)
        if row is None:
            row = model(**values)
            session.add(row)
        else:
            for name, value in values.items():
                setattr(row, name, value)
    session.flush()
    return row


# ---------- Repositories ----------

class SQLAlchemyProductRepository(ProductRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, product: Product) -> Product:
        row = _upsert(self.session, ProductModel, product.id,
                      id=product.id, name=product.name, price=product.price)
        return _product(row)

    def find_by_id(self, product_id: int) -> Optional[Product]:
        row = self.session.get(ProductModel, product_id)
        return _product(row) if row else None

    def find_all(self) -> List[Product]:
        rows = self.session.execute(select(ProductModel).order_by(ProductModel.id)).scalars().all()
        return [_product(r) for r in rows]

    def find_all_by_id_in(self, product_ids: Iterable[int]) -> List[Product]:
        stmt = select(ProductModel).where(ProductModel.id.in_(set(product_ids))).order_by(ProductModel.id)
        return [_product(r) for r in self.session.execute(stmt).scalars().all()]


class SQLAlchemyMenuGroupRepository(MenuGroupRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, menu_group: MenuGroup) -> MenuGroup:
        row = _upsert(self.session, MenuGroupModel, menu_group.id,
                      id=menu_group.id, name=menu_group.name)
        return _menu_group(row)

    def find_by_id(self, menu_group_id: int) -> Optional[MenuGroup]:
        row = self.session.get(MenuGroupModel, menu_group_id)
        return _menu_group(row) if row else None

    def find_all(self) -> List[MenuGroup]:
        rows = self.session.execute(select(MenuGroupModel).order_by(MenuGroupModel.id)).scalars().all()
        return [_menu_group(r) for r in rows]

    def exists_by_id(self, menu_group_id: int) -> bool:
        stmt = select(exists().where(MenuGroupModel.id == menu_group_id))
        return bool(self.session.execute(stmt).scalar())


class SQLAlchemyMenuRepository(MenuRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, menu: Menu) -> Menu:
        row = _upsert(self.session, MenuModel, menu.id, id=menu.id, name=menu.name,
                      price=menu.price, menu_group_id=menu.menu_group_id)
        return _menu(row)

    def find_by_id(self, menu_id: int) -> Optional[Menu]:
        row = self.session.get(MenuModel, menu_id)
        return _menu(row) if row else None

    def find_all(self) -> List[Menu]:
        rows = self.session.execute(select(MenuModel).order_by(MenuModel.id)).scalars().all()
        return [_menu(r) for r in rows]

    def count_by_id_in(self, menu_ids: Iterable[int]) -> int:
        stmt = select(func.count(MenuModel.id)).where(MenuModel.id.in_(set(menu_ids)))
        return int(self.session.execute(stmt).scalar() or 0)


class SQLAlchemyMenuProductRepository(MenuProductRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, menu_product: MenuProduct) -> MenuProduct:
        row = _upsert(self.session, MenuProductModel, menu_product.seq, seq=menu_product.seq,
                      menu_id=menu_product.menu_id, product_id=menu_product.product_id,
                      quantity=menu_product.quantity)
        return _menu_product(row)

    def find_all_by_menu_id(self, menu_id: int) -> List[MenuProduct]:
        stmt = (
            select(MenuProductModel)
            .where(MenuProductModel.menu_id == menu_id)
            .order_by(MenuProductModel.seq)
        )
        return [_menu_product(r) for r in self.session.execute(stmt).scalars().all()]


class SQLAlchemyOrderRepository(OrderRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, order: Order) -> Order:
        row = _upsert(self.session, OrderModel, order.id, id=order.id,
                      order_table_id=order.order_table_id,
                      order_status=order.order_status.value,
                      ordered_time=order.ordered_time)
        return _order(row)

    def find_by_id(self, order_id: int) -> Optional[Order]:
        row = self.session.get(OrderModel, order_id)
        return _order(row) if row else None

    def find_all(self) -> List[Order]:
        rows = self.session.execute(select(OrderModel).order_by(OrderModel.id)).scalars().all()
        return [_order(r) for r in rows]

    def exists_by_order_table_id_in_and_status_in(
        self, order_table_ids: Iterable[int], statuses: Iterable[OrderStatus]
    ) -> bool:
        stmt = select(
            exists()
            .where(OrderModel.order_table_id.in_(set(order_table_ids)))
            .where(OrderModel.order_status.in_([OrderStatus(s).value for s in statuses]))
        )
        return bool(self.session.execute(stmt).scalar())


class SQLAlchemyOrderLineItemRepository(OrderLineItemRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, order_line_item: OrderLineItem) -> OrderLineItem:
        row = _upsert(self.session, OrderLineItemModel, order_line_item.seq,
                      seq=order_line_item.seq, order_id=order_line_item.order_id,
                      menu_id=order_line_item.menu_id, quantity=order_line_item.quantity)
        return _order_line_item(row)

    def find_all_by_order_id(self, order_id: int) -> List[OrderLineItem]:
        stmt = (
            select(OrderLineItemModel)
            .where(OrderLineItemModel.order_id == order_id)
            .order_by(OrderLineItemModel.seq)
        )
        return [_order_line_item(r) for r in self.session.execute(stmt).scalars().all()]


class SQLAlchemyOrderTableRepository(OrderTableRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, order_table: OrderTable) -> OrderTable:
        row = _upsert(self.session, OrderTableModel, order_table.id, id=order_table.id,
                      table_group_id=order_table.table_group_id,
                      number_of_guests=order_table.number_of_guests,
                      empty=order_table.empty)
        return _order_table(row)

    def find_by_id(self, order_table_id: int) -> Optional[OrderTable]:
        row = self.session.get(OrderTableModel, order_table_id)
        return _order_table(row) if row else None

    def find_all(self) -> List[OrderTable]:
        rows = self.session.execute(select(OrderTableModel).order_by(OrderTableModel.id)).scalars().all()
        return [_order_table(r) for r in rows]

    def find_all_by_id_in(self, order_table_ids: Iterable[int]) -> List[OrderTable]:
        stmt = (
            select(OrderTableModel)
            .where(OrderTableModel.id.in_(set(order_table_ids)))
            .order_by(OrderTableModel.id)
        )
        return [_order_table(r) for r in self.session.execute(stmt).scalars().all()]


class SQLAlchemyTableGroupRepository(TableGroupRepository):
    def __init__(self, session: Session):
        self.session = session

    def save(self, table_group: TableGroup) -> TableGroup:
        row = _upsert(self.session, TableGroupModel, table_group.id,
                      id=table_group.id, created_date=table_group.created_date)
        for order_table in table_group.order_tables:
            _upsert(self.session, OrderTableModel, order_table.id, id=order_table.id,
                    table_group_id=row.id,
                    number_of_guests=order_table.number_of_guests,
                    empty=order_table.empty)
        self.session.refresh(row)
        return _table_group(row)

    def find_by_id(self, table_group_id: int) -> Optional[TableGroup]:
        row = self.session.get(TableGroupModel, table_group_id)
        return _table_group(row) if row else None

    def exists_by_order_table(self, order_table: OrderTable) -> bool:
        stmt = select(
            exists()
            .where(TableGroupModel.id == OrderTableModel.table_group_id)
            .where(OrderTableModel.id == order_table.id)
        )
        return bool(self.session.execute(stmt).scalar())

    def remove_by_id(self, table_group_id: int) -> None:
        self.session.execute(delete(TableGroupModel).where(TableGroupModel.id == table_group_id))
        self.session.flush()


# ---------- Storage ----------

class SQLAlchemyStorage(Storage):
    """
    SQLAlchemy-backed storage using the canonical kitchenpos schema.

    Each unit of work owns one Session inside an explicit transaction block.
    """

    name = "sqlalchemy"

    def __init__(self, database_url: str = "sqlite:///kitchenpos.db", use_alembic: bool = False):
        """
        Initialize SQLAlchemy storage.

        Args:
            database_url: SQLAlchemy database URL
            use_alembic: Run Alembic migrations instead of create_all
        """
        self.database_url = database_url

        engine_kwargs = {}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees a fresh database
            engine_kwargs["poolclass"] = StaticPool

        # future=True: use SQLAlchemy 2.0 style execution
        # pool_pre_ping=True: verify connections before use (detect stale connections)
        self.engine = create_engine(
            self.database_url,
            connect_args={"check_same_thread": False} if "sqlite" in database_url else {},
            echo=False,
            future=True,
            pool_pre_ping=True,
            **engine_kwargs,
        )

        # expire_on_commit=False: entities are mapped before commit anyway
        self.SessionLocal = sessionmaker(bind=self.engine, expire_on_commit=False)

        init_db(self.engine, use_alembic=use_alembic, base=Base)
        logger.info("SQLAlchemyStorage ready at %s", self.database_url)

    def _get_session(self) -> Session:
        """Get a new database session (caller must close)."""
        return self.SessionLocal()

    @contextmanager
    def unit_of_work(self) -> Iterator[UnitOfWork]:
        session = self._get_session()
        try:
            with session.begin():
                yield UnitOfWork(
                    products=SQLAlchemyProductRepository(session),
                    menu_groups=SQLAlchemyMenuGroupRepository(session),
                    menus=SQLAlchemyMenuRepository(session),
                    menu_products=SQLAlchemyMenuProductRepository(session),
                    orders=SQLAlchemyOrderRepository(session),
                    order_line_items=SQLAlchemyOrderLineItemRepository(session),
                    order_tables=SQLAlchemyOrderTableRepository(session),
                    table_groups=SQLAlchemyTableGroupRepository(session),
                )
        finally:
            session.close()

    def clear(self) -> None:
        """Delete every row, children first."""
        session = self._get_session()
        try:
            with session.begin():
                for model in (
                    OrderLineItemModel,
                    OrderModel,
                    MenuProductModel,
                    MenuModel,
                    MenuGroupModel,
                    ProductModel,
                    OrderTableModel,
                    TableGroupModel,
                ):
                    session.execute(delete(model))
        finally:
            session.close()

    def close(self) -> None:
        """Close database connections."""
        self.engine.dispose()
