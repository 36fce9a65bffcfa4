"""Storefront management CLI.

Usage:
    python src/manage.py setup-db          # Create all tables
    python src/manage.py drop-db           # Drop all tables
    python src/manage.py seed-catalogue    # Load a handful of demo products
"""

import argparse
import json
import sys

_DEMO_PRODUCTS = [
    {
        "name": "Classic Black T-Shirt",
        "description": "Premium cotton crew-neck tee.",
        "price": 19.99,
        "stock_quantity": 120,
        "category": "apparel",
        "images": ["https://cdn.example.com/tshirt-black.jpg"],
    },
    {
        "name": "Trail Running Shoes",
        "description": "Lightweight shoes with an aggressive grip sole.",
        "price": 89.50,
        "stock_quantity": 35,
        "category": "footwear",
        "images": ["https://cdn.example.com/trail-shoes.jpg"],
    },
    {
        "name": "Insulated Water Bottle",
        "description": "Keeps drinks cold for 24 hours.",
        "price": 24.00,
        "stock_quantity": 200,
        "category": "outdoor",
        "images": [],
    },
]


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    print("Creating storefront database schema...")
    touched = setup_db(_domain())
    print(f"  schema ready on: {', '.join(touched) or 'no SQL providers'}")


def drop_database():
    from storefront.utils.db import drop_db

    print("Dropping storefront database schema...")
    touched = drop_db(_domain())
    print(f"  schema dropped on: {', '.join(touched) or 'no SQL providers'}")


def seed_catalogue(path=None):
    """Create products from a JSON file (a list of product objects), or the demo set."""
    from storefront.catalogue.management import CreateProduct

    products = _DEMO_PRODUCTS
    if path:
        with open(path, encoding="utf-8") as handle:
            products = json.load(handle)

    domain = _domain()
    with domain.domain_context():
        for product in products:
            payload = dict(product)
            payload["images"] = json.dumps(payload.get("images") or [])
            product_id = domain.process(CreateProduct(**payload), asynchronous=False)
            print(f"  {product_id}  {product['name']}")
    print(f"Seeded {len(products)} products.")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-catalogue", help="Load products into the catalogue")
    seed_parser.add_argument("--file", help="JSON file with a list of products (default: demo set)")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-catalogue":
        seed_catalogue(args.file)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
