"""Storage abstraction layer for kitchenpos."""

from .base import Storage, UnitOfWork
from .inmemory import InMemoryStorage
from .sqlalchemy_adapter import SQLAlchemyStorage

__all__ = ["Storage", "UnitOfWork", "InMemoryStorage", "SQLAlchemyStorage"]
