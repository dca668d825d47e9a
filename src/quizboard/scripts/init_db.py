"""Create (or recreate) the schema directly from the ORM metadata.

Meant for local development and throwaway databases; deployed databases
are managed with ``quizboard.scripts.migrate``.
"""
from __future__ import annotations

import argparse
import sys

from sqlalchemy.exc import SQLAlchemyError

from quizboard.core.settings import settings
from quizboard.db.session import create_tables, drop_tables


def main() -> None:
    parser = argparse.ArgumentParser(description="Create the Quizboard tables")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before creating the schema.",
    )
    args = parser.parse_args()

    try:
        if args.drop_tables:
            drop_tables()
            print("[init_db] dropped all tables")
        create_tables()
    except SQLAlchemyError as exc:
        print(f"[init_db] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    print(f"[init_db] schema ready at {settings.effective_database_url}")


if __name__ == "__main__":
    main()
