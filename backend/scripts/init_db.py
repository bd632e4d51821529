"""Create the schema and bring participant counters in line with registrations.

Usage:
    python scripts/init_db.py            # create missing tables, reconcile counters
    python scripts/init_db.py --reset    # drop every table first (destroys data)
"""
import argparse
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from intern_admin.database import SessionLocal, engine, Base
import intern_admin.models  # noqa: F401 - registers all models
from intern_admin.services import participant_service


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Initialize the registration database.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop all tables before recreating them.",
    )
    return parser.parse_args(argv)


def init_db(reset: bool = False) -> int:
    if reset:
        print(f"Dropping all tables on {engine.url.render_as_string(hide_password=True)} ...")
        Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        synced = participant_service.reconcile_all(db)
    finally:
        db.close()
    print(f"Database ready. Participant counts reconciled for {synced} programs.")
    return synced


if __name__ == "__main__":
    args = parse_args()
    init_db(reset=args.reset)
