"""Fat Cat storefront management CLI.

Usage:
    python src/manage.py setup-db             # Create all tables
    python src/manage.py drop-db              # Drop all tables
    python src/manage.py seed                 # Sample categories, products and settings
    python src/manage.py dedup-customers      # Merge customers sharing an email
    python src/manage.py aggregate-analytics [--date YYYY-MM-DD]
"""

import argparse
import sys
from datetime import UTC, date, datetime, timedelta


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    storefront = _domain()
    print("Creating storefront database schema...")
    setup_db(storefront)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    storefront = _domain()
    print("Dropping storefront database schema...")
    drop_db(storefront)
    print("Done.")


SAMPLE_CATEGORIES = [
    {"name": "Toys", "description": "Things to chase, bat and pounce on.", "sort_order": 0},
    {"name": "Treats", "description": "Snacks for good behaviour.", "sort_order": 1},
    {"name": "Beds", "description": "Somewhere soft for the eighteen-hour nap.", "sort_order": 2},
]

SAMPLE_PRODUCTS = [
    ("Toys", "Feather Wand", "feather-wand", 899, 1299, "toys,interactive", 40),
    ("Toys", "Catnip Mouse Trio", "catnip-mouse-trio", 599, None, "toys,catnip", 120),
    ("Treats", "Salmon Crunchies", "salmon-crunchies", 349, None, "treats,fish", 200),
    ("Treats", "Chicken Bites", "chicken-bites", 399, 499, "treats,chicken", 150),
    ("Beds", "Cloud Nine Bed", "cloud-nine-bed", 3499, 4299, "beds,plush", 15),
]


def seed():
    """Load sample catalogue data into an empty store."""
    from protean.utils.globals import current_domain

    from storefront.catalogue.category.category import Category
    from storefront.catalogue.category.management import CreateCategory
    from storefront.catalogue.product.management import CreateProduct
    from storefront.catalogue.product.product import Product

    storefront = _domain()
    with storefront.domain_context():
        if current_domain.repository_for(Product)._dao.query.all().items:
            print("Catalogue already has products, skipping seed.")
            return

        category_ids = {}
        for details in SAMPLE_CATEGORIES:
            category_ids[details["name"]] = current_domain.process(CreateCategory(**details), asynchronous=False)
        print(f"  {len(category_ids)} categories created.")

        for category, title, slug, price, compare_at, tags, stock in SAMPLE_PRODUCTS:
            current_domain.process(
                CreateProduct(
                    title=title,
                    slug=slug,
                    description=f"{title} for the discerning cat.",
                    price=price,
                    compare_at_price=compare_at,
                    category_id=category_ids[category],
                    status="active",
                    tags=tags,
                    stock=stock,
                ),
                asynchronous=False,
            )
        print(f"  {len(SAMPLE_PRODUCTS)} products created.")
        print(f"  {len(current_domain.repository_for(Category)._dao.query.all().items)} categories in store.")
    print("Done.")


def dedup_customers():
    from storefront.customers.dedup import dedup_customers as run_dedup

    storefront = _domain()
    with storefront.domain_context():
        removed = run_dedup()
    print(f"Removed {removed} duplicate customer record(s).")


def aggregate_analytics(day: date):
    from storefront.analytics.summary import aggregate_day

    storefront = _domain()
    with storefront.domain_context():
        summary = aggregate_day(day)
    print(
        f"{summary.date}: {summary.unique_visitors} visitors, {summary.page_views} page views, "
        f"{summary.orders_count} orders, revenue {summary.revenue}"
    )


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date: {value} (expected YYYY-MM-DD)")


def main():
    parser = argparse.ArgumentParser(description="Fat Cat storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Load sample catalogue data")
    subparsers.add_parser("dedup-customers", help="Merge customers that share an email address")

    analytics_parser = subparsers.add_parser("aggregate-analytics", help="Build the daily analytics summary")
    analytics_parser.add_argument(
        "--date",
        type=_parse_date,
        default=None,
        help="Day to aggregate (default: yesterday, UTC)",
    )

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    elif args.command == "dedup-customers":
        dedup_customers()
    elif args.command == "aggregate-analytics":
        aggregate_analytics(args.date or datetime.now(UTC).date() - timedelta(days=1))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
