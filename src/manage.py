"""La Patisserie database management CLI.

Creates and drops the relational schema for every aggregate registered in
the patisserie domain. Point ``PROTEAN_ENV`` at a config overlay that uses
PostgreSQL before running it.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_database():
    """Create the database schema for the patisserie domain."""
    from patisserie.domain import patisserie
    from patisserie.utils.db import setup_db

    print("Initializing patisserie domain...")
    patisserie.init()
    print("Creating database schema...")
    setup_db(patisserie)
    print("Done.")


def drop_database():
    """Drop the database schema for the patisserie domain."""
    from patisserie.domain import patisserie
    from patisserie.utils.db import drop_db

    print("Initializing patisserie domain...")
    patisserie.init()
    print("Dropping database schema...")
    drop_db(patisserie)
    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="La Patisserie database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
