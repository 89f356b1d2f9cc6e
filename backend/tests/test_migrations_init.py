"""
Test suite for database initialization and migrations.

init_db must produce the same schema whether it runs the Alembic
migrations or falls back to metadata.create_all.
"""

import pytest
from sqlalchemy import create_engine, inspect

from kitchenpos.db import init_db
from kitchenpos.db.models import Base
from kitchenpos.storage import SQLAlchemyStorage

EXPECTED_TABLES = {
    "product",
    "menu_group",
    "menu",
    "menu_product",
    "order_table",
    "table_group",
    "orders",
    "order_line_item",
}


class TestInitDBFallback:
    """init_db with use_alembic=False."""

    def test_creates_all_tables(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'fallback.db'}")
        try:
            init_db(engine, use_alembic=False, base=Base)
            tables = set(inspect(engine).get_table_names())
            assert EXPECTED_TABLES <= tables

            columns = {col["name"] for col in inspect(engine).get_columns("order_table")}
            assert {"id", "table_group_id", "number_of_guests", "empty"} <= columns
        finally:
            engine.dispose()

    def test_is_idempotent(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'twice.db'}")
        try:
            init_db(engine, use_alembic=False, base=Base)
            init_db(engine, use_alembic=False, base=Base)
            assert EXPECTED_TABLES <= set(inspect(engine).get_table_names())
        finally:
            engine.dispose()


class TestInitDBAlembic:
    """init_db with use_alembic=True runs the versioned migrations."""

    def test_upgrade_creates_schema(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'alembic.db'}")
        try:
            init_db(engine, use_alembic=True)
            tables = set(inspect(engine).get_table_names())
            assert EXPECTED_TABLES <= tables
            assert "alembic_version" in tables
        finally:
            engine.dispose()

    def test_storage_works_on_migrated_schema(self, tmp_path):
        storage = SQLAlchemyStorage(f"sqlite:///{tmp_path / 'migrated.db'}", use_alembic=True)
        try:
            from kitchenpos.services import menu_group_service

            with storage.unit_of_work() as uow:
                menu_group_service.create_menu_group(uow, "Set menus")
            with storage.unit_of_work() as uow:
                assert [g.name for g in menu_group_service.list_menu_groups(uow)] == ["Set menus"]
        finally:
            storage.close()
