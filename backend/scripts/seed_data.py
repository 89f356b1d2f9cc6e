"""
Seed products, menu groups, menus and order tables from a JSON file.

Everything is created through the services inside one unit of work, so a
single invalid entry (e.g. a menu priced above its products) leaves the
database untouched.

Data file layout:
    {
        "menu_groups": ["Set menus", ...],
        "products": [{"name": "Fried chicken", "price": 16000}, ...],
        "menus": [{"name": "...", "price": 16000, "menu_group": "Set menus",
                   "menu_products": [{"product": "Fried chicken", "quantity": 1}]}],
        "tables": [{"number_of_guests": 0, "empty": true}, ...]
    }

Usage:
    python -m scripts.seed_data --data-file path/to/seed.json [--database-url URL]

Environment:
    APP_DATABASE_URL: Database connection (default: sqlite:///kitchenpos.db)
"""

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict

from kitchenpos.domain import InvalidArgumentError, KitchenPosError
from kitchenpos.services import menu_group_service, menu_service, product_service, table_service
from kitchenpos.storage import SQLAlchemyStorage, Storage

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_seed_json(data_file: str) -> Dict[str, Any]:
    """
    Load seed data from JSON file.

    Args:
        data_file: Path to the JSON file

    Returns:
        Parsed seed dictionary
    """
    if not os.path.exists(data_file):
        raise FileNotFoundError(f"Seed file not found: {data_file}")

    with open(data_file, 'r', encoding='utf-8') as f:
        data = json.load(f)

    logger.info(f"Loaded seed data from {data_file} with sections {sorted(data)}")
    return data


def seed_data(storage: Storage, data: Dict[str, Any]) -> Dict[str, int]:
    """
    Create every entity described in the seed dictionary.

    Menus reference their group and products by name.

    Args:
        storage: Storage to write into
        data: Seed dictionary (see module docstring)

    Returns:
        Stats dict with created counts per entity kind

    Raises:
        InvalidArgumentError: unknown group/product name or a rejected entity
    """
    stats = {"menu_groups": 0, "products": 0, "menus": 0, "tables": 0}

    with storage.unit_of_work() as uow:
        group_ids = {}
        for name in data.get("menu_groups", []):
            group = menu_group_service.create_menu_group(uow, name)
            group_ids[group.name] = group.id
            stats["menu_groups"] += 1

        product_ids = {}
        for entry in data.get("products", []):
            product = product_service.create_product(uow, entry.get("name"), entry.get("price"))
            product_ids[product.name] = product.id
            stats["products"] += 1

        for entry in data.get("menus", []):
            group_name = entry.get("menu_group")
            if group_name not in group_ids:
                raise InvalidArgumentError(f"Menu '{entry.get('name')}' references unknown group '{group_name}'")

            menu_products = []
            for mp in entry.get("menu_products", []):
                if mp.get("product") not in product_ids:
                    raise InvalidArgumentError(f"Menu '{entry.get('name')}' references unknown product '{mp.get('product')}'")
                menu_products.append({"product_id": product_ids[mp["product"]], "quantity": mp.get("quantity", 1)})

            menu_service.create_menu(
                uow, entry.get("name"), entry.get("price"), group_ids[group_name], menu_products
            )
            stats["menus"] += 1

        for entry in data.get("tables", []):
            table_service.create_table(
                uow, entry.get("number_of_guests", 0), entry.get("empty", True)
            )
            stats["tables"] += 1

    logger.info(f"Seeded {stats}")
    return stats


def main() -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description='Seed kitchenpos data from JSON')
    parser.add_argument(
        '--data-file',
        required=True,
        help='Path to seed JSON file'
    )
    parser.add_argument(
        '--database-url',
        help='Database URL (default: env var APP_DATABASE_URL or sqlite:///kitchenpos.db)',
        default=None
    )

    args = parser.parse_args()

    try:
        data = load_seed_json(args.data_file)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load seed data: {e}")
        return 1

    db_url = args.database_url or os.getenv('APP_DATABASE_URL', 'sqlite:///kitchenpos.db')
    logger.info(f"Using database: {db_url}")

    storage = SQLAlchemyStorage(db_url)
    try:
        stats = seed_data(storage, data)

        print("\n" + "="*60)
        print("SEED RESULTS")
        print("="*60)
        for kind, count in stats.items():
            print(f"{kind.replace('_', ' ').title() + ':':<18}{count}")
        print("="*60 + "\n")

        return 0

    except KitchenPosError as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        storage.close()


if __name__ == '__main__':
    sys.exit(main())
