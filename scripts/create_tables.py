"""
create_tables.py — idempotent table creation script.
Run this before starting the service for the first time, or after schema changes.
Safe to run multiple times (all DDL uses IF NOT EXISTS).

Usage:
    python scripts/create_tables.py
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from diningreview.database import create_tables, engine


async def main() -> None:
    """Create all tables."""
    print(f"Creating tables on {engine.url.render_as_string(hide_password=True)}...")
    await create_tables()
    print("  ✓ All tables created (IF NOT EXISTS)")

    print("\nDone. Run `python scripts/ingest.py --csv data/restaurants.csv` next.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
