"""Menu group creation and listing."""

import logging
from typing import List

from kitchenpos.domain import InvalidArgumentError, MenuGroup
from kitchenpos.storage import UnitOfWork

logger = logging.getLogger(__name__)


def create_menu_group(uow: UnitOfWork, name: str) -> MenuGroup:
    if name is None or not str(name).strip():
        raise InvalidArgumentError("Menu group name is required")
    saved = uow.menu_groups.save(MenuGroup(name=name))
    logger.info("Created menu group %s (%s)", saved.id, saved.name)
    return saved


def list_menu_groups(uow: UnitOfWork) -> List[MenuGroup]:
    return uow.menu_groups.find_all()
