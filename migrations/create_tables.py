import argparse
import os
import sys

sys.path.append(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
)  # relative imports

from sqlalchemy import inspect

from eventdesk import create_app
from eventdesk.extensions import db
import eventdesk.models  # noqa: F401

CHECK_IN_TABLES = ("events", "registrations")


def create_check_in_tables(app=None, reset=False):
    """Create the events and registrations tables without running Alembic.

    With ``reset`` both tables are dropped first, wiping every registration
    and check-in stamp. Returns the check-in tables present afterwards.
    """
    app = app or create_app()
    with app.app_context():
        if reset:
            print("Dropping events and registrations...")
            db.drop_all()

        existing = set(inspect(db.engine).get_table_names())
        missing = [name for name in CHECK_IN_TABLES if name not in existing]
        db.create_all()

        if missing:
            print(f"Created tables: {', '.join(missing)}")
        else:
            print("Check-in tables already exist, nothing to create")

        present = set(inspect(db.engine).get_table_names())
        return [name for name in CHECK_IN_TABLES if name in present]


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the check-in tables")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="drop events and registrations before creating them",
    )
    args = parser.parse_args()
    create_check_in_tables(reset=args.reset)
