"""Script to run database migrations."""

import argparse
import sys

from alembic import command
from alembic.config import Config


def run_migrations(alembic_cfg: Config, revision: str) -> None:
    """Upgrade the database to the given revision."""
    print(f"Running database migrations to {revision}...")
    command.upgrade(alembic_cfg, revision)
    print("✓ Migrations completed successfully!")


def create_migration(alembic_cfg: Config, message: str) -> None:
    """Autogenerate a migration from the difference between models and database."""
    print(f"Creating migration: {message}")
    command.revision(alembic_cfg, message=message, autogenerate=True)
    print("✓ Migration created successfully!")


def main() -> int:
    parser = argparse.ArgumentParser(description="Apply or create Alembic migrations")
    subparsers = parser.add_subparsers(dest="command")

    upgrade_parser = subparsers.add_parser("upgrade", help="apply migrations (default)")
    upgrade_parser.add_argument("revision", nargs="?", default="head")

    create_parser = subparsers.add_parser("create", help="autogenerate a new migration")
    create_parser.add_argument("message", nargs="+")

    args = parser.parse_args()
    alembic_cfg = Config("alembic.ini")

    try:
        if args.command == "create":
            create_migration(alembic_cfg, " ".join(args.message))
        else:
            run_migrations(alembic_cfg, getattr(args, "revision", "head"))
    except Exception as e:
        print(f"✗ Migration failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
