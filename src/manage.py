"""Marketplace database management CLI.

Creates and drops the Ordering schema, and seeds the catalogue projection
with demo products for local development.

Usage:
    python src/manage.py setup-db       # Create all tables
    python src/manage.py drop-db        # Drop all tables
    python src/manage.py seed-catalog   # Insert demo products (skips existing)
"""

import argparse
import json
import sys
from datetime import datetime, timezone

DEMO_PRODUCTS = [
    {
        "product_id": "running-tee",
        "name": "Running Tee Pro",
        "unit_price": 24.99,
        "category": "Clothing",
        "in_stock": True,
        "sizes": ["S", "M", "L", "XL"],
    },
    {
        "product_id": "training-shoe",
        "name": "Training Shoe X",
        "unit_price": 79.99,
        "category": "Footwear",
        "in_stock": True,
        "sizes": ["38", "39", "40", "41", "42", "43"],
    },
    {
        "product_id": "sport-backpack",
        "name": "Sport Backpack",
        "unit_price": 39.99,
        "category": "Accessories",
        "in_stock": True,
        "sizes": [],
    },
    {
        "product_id": "yoga-mat",
        "name": "Yoga Mat",
        "unit_price": 29.50,
        "category": "Accessories",
        "in_stock": False,
        "sizes": [],
    },
]


def setup_database():
    """Create the Ordering database schema."""
    from ordering.domain import ordering
    from ordering.utils.db import setup_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Creating ordering database schema...")
    setup_db(ordering)
    print("Done.")


def drop_database():
    """Drop the Ordering database schema."""
    from ordering.domain import ordering
    from ordering.utils.db import drop_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Dropping ordering database schema...")
    drop_db(ordering)
    print("Done.")


def seed_catalog(products=None) -> int:
    """Insert demo products into the catalogue projection.

    Products already present are left untouched. Returns the number created.
    """
    from protean.exceptions import ObjectNotFoundError

    from ordering.catalog.product_catalogue import ProductCatalogue
    from ordering.domain import ordering

    ordering.init()
    created = 0
    with ordering.domain_context():
        repo = ordering.repository_for(ProductCatalogue)
        for product in products if products is not None else DEMO_PRODUCTS:
            try:
                repo.get(product["product_id"])
                continue
            except ObjectNotFoundError:
                pass

            repo.add(
                ProductCatalogue(
                    product_id=product["product_id"],
                    name=product["name"],
                    unit_price=product["unit_price"],
                    in_stock=product["in_stock"],
                    category=product["category"],
                    sizes=json.dumps(product["sizes"]),
                    updated_at=datetime.now(timezone.utc),
                )
            )
            created += 1

    print(f"Seeded {created} product(s).")
    return created


def main():
    parser = argparse.ArgumentParser(description="Marketplace database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed-catalog", help="Insert demo products into the catalogue")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-catalog":
        seed_catalog()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
