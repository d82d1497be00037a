# scripts/setup/init_db.py
"""
Initialize database: creates all tables.
Run once before first launch, or after adding new models.
Usage: python scripts/setup/init_db.py
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from vehicle_registry.database import create_tables, engine
from vehicle_registry.config import settings
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError


def main():
    print("Vehicle Registry DB Initialization")
    print("=" * 40)
    print(f"Database: {engine.url.render_as_string(hide_password=True)}")

    # Test connection
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        print("Database connection OK")
    except SQLAlchemyError as e:
        print(f"Cannot connect to database: {e}")
        print("\nMake sure PostgreSQL is running and DATABASE_URL is set:")
        print("  sudo systemctl start postgresql")
        sys.exit(1)

    print("\nCreating tables...")
    create_tables()
    print("All tables created")

    tables = inspect(engine).get_table_names()
    print(f"\nTables in database ({len(tables)} total):")
    for t in tables:
        print(f"   - {t}")

    print("\nDatabase ready! You can now start the backend:")
    print(f"   uvicorn vehicle_registry.main:app --host {settings.HOST} --port {settings.PORT} --reload")


if __name__ == "__main__":
    main()
