"""Storefront management CLI.

Creates and drops the relational schema and seeds the administrator account.
Schema commands only touch sqlite/postgresql providers; the in-memory
provider needs no setup.

Usage:
    python src/manage.py setup-db    # Create all tables
    python src/manage.py drop-db     # Drop all tables
    python src/manage.py bootstrap   # Ensure the admin account exists
"""

import argparse
import sys


def _initialized_domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _initialized_domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _initialized_domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def bootstrap():
    from storefront.identity.bootstrap import ensure_default_admin

    domain = _initialized_domain()
    user_id = ensure_default_admin(domain)
    if user_id:
        print(f"Created admin account {domain.ADMIN_EMAIL} ({user_id}).")
    else:
        print(f"Admin account {domain.ADMIN_EMAIL} already present.")


COMMANDS = {
    "setup-db": setup_database,
    "drop-db": drop_database,
    "bootstrap": bootstrap,
}


def main(argv=None):
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("bootstrap", help="Create the configured admin account if missing")

    args = parser.parse_args(argv)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)
    handler()


if __name__ == "__main__":
    main()
