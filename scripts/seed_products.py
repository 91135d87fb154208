#!/usr/bin/env python3
"""
Seed script: enqueue sample product documents for indexing.
Celery worker must be running unless --sync is given (indexes directly).
  python scripts/seed_products.py
  python scripts/seed_products.py --count 500 --sync
  python scripts/seed_products.py --remove 17 18
"""

import argparse
import json
import random
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from catalog_graphql.config import get_settings
from catalog_graphql.queue.tasks import index_product_task, remove_product_task
from catalog_graphql.search.elasticsearch_client import (
    ensure_products_index_sync,
    index_product_sync,
    remove_product_sync,
)

NAMES = [
    "Running Shoe", "Trail Jacket", "Wool Sweater", "Denim Jeans", "Leather Belt",
    "Cotton T-Shirt", "Rain Coat", "Hiking Boot", "Sports Bag", "Yoga Mat",
    "Water Bottle", "Sun Glasses", "Baseball Cap", "Winter Gloves", "Scarf",
]
COLORS = ["black", "white", "red", "blue", "green", "grey"]
CATEGORIES = ["3", "4", "5", "12", "13", "20"]
SOURCES = ["default", "warehouse_pl", "warehouse_de"]


def random_product(i: int, store_id: int) -> dict:
    name = f"{random.choice(NAMES)} {random.choice(COLORS).title()}"
    sources = [
        {"source_code": code, "quantity": random.randint(0, 50), "status": 1}
        for code in random.sample(SOURCES, k=random.randint(1, len(SOURCES)))
    ]
    return {
        "id": str(i),
        "sku": f"SKU-{i:05d}",
        "name": name,
        "description": f"{name}. Comfortable, durable and easy to care for.",
        "url_key": name.lower().replace(" ", "-") + f"-{i}",
        "price": random.choice([19.99, 29.99, 49.0, 79.5, 99.99, 149.0]),
        "category_id": random.sample(CATEGORIES, k=2),
        "color": random.choice(COLORS),
        "store_id": store_id,
        "object_type": "product",
        "visibility": random.choice([1, 4, 4, 4]),
        "status": random.choice([1, 1, 1, 2]),
        "inventory_sources": json.dumps(sources),
    }


def remove_products(product_ids: list[str], sync: bool) -> None:
    if not sync:
        for product_id in product_ids:
            remove_product_task.delay(product_id)
        print(f"Enqueued removal of {len(product_ids)} products. Ensure Celery worker is running.")
        return
    failed = sum(1 for product_id in product_ids if not remove_product_sync(product_id))
    print(f"Removed {len(product_ids) - failed} products ({failed} failed).")


def main():
    ap = argparse.ArgumentParser(description="Seed sample products into the search index")
    ap.add_argument("--count", type=int, default=200, help="Number of products")
    ap.add_argument("--sync", action="store_true", help="Index directly instead of through Celery")
    ap.add_argument("--remove", nargs="+", metavar="ID", help="Remove these product ids instead of seeding")
    args = ap.parse_args()

    if args.remove:
        remove_products(args.remove, args.sync)
        return

    settings = get_settings()
    if args.sync:
        ensure_products_index_sync()

    failed = 0
    for i in range(1, args.count + 1):
        doc = random_product(i, settings.store_id)
        if args.sync:
            if not index_product_sync(doc):
                failed += 1
        else:
            index_product_task.delay(doc)

    if args.sync:
        print(f"Indexed {args.count - failed} products ({failed} failed).")
    else:
        print(f"Enqueued {args.count} products. Ensure Celery worker is running.")


if __name__ == "__main__":
    main()
