import sys
from pathlib import Path

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from expense_tracker.config import settings
from expense_tracker.database import engine, init_db
from sqlalchemy import inspect


def main():
    url = settings.database_url or ""
    print(f"Database URL: {url}")
    existing = set(inspect(engine).get_table_names())
    init_db(engine)
    created = set(inspect(engine).get_table_names()) - existing
    if created:
        print(f"Created tables: {', '.join(sorted(created))}")
    else:
        print("All tables already exist. Nothing to do.")


if __name__ == "__main__":
    main()
