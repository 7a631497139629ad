"""Custody database management CLI.

Creates or drops the SQL schema backing the custody domain. Only SQL
providers are touched; the in-memory provider needs no schema.

Usage:
    PROTEAN_ENV=production python src/manage.py setup-db   # Create all tables
    PROTEAN_ENV=production python src/manage.py drop-db    # Drop all tables
"""

import argparse
import sys


def setup_databases():
    """Create database schemas for the custody domain."""
    from custody.domain import custody
    from custody.utils.db import setup_db

    print("Initializing custody domain...")
    custody.init()
    print("Creating custody database schema...")
    touched = setup_db(custody)
    print(f"  schema ready for provider(s): {', '.join(touched) or 'none (memory only)'}")
    print("Done.")
    return touched


def drop_databases():
    """Drop database schemas for the custody domain."""
    from custody.domain import custody
    from custody.utils.db import drop_db

    print("Initializing custody domain...")
    custody.init()
    print("Dropping custody database schema...")
    touched = drop_db(custody)
    print(f"  schema dropped for provider(s): {', '.join(touched) or 'none (memory only)'}")
    print("Done.")
    return touched


def main(argv=None):
    parser = argparse.ArgumentParser(description="Custody database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_databases()
    elif args.command == "drop-db":
        drop_databases()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
