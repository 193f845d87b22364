"""
ingest.py — bulk restaurant registration from a CSV file.

Expected columns: name, street, city, state, zipcode (street/city/state may be empty).
Every row goes through RestaurantService, so the (name, zipcode) rule applies:
duplicates (already stored, or repeated in the file) are skipped with a warning.

Usage:
    python scripts/ingest.py --csv data/restaurants.csv             # register all rows
    python scripts/ingest.py --csv data/restaurants.csv --dry-run   # parse, no DB writes
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import re
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

sys.path.insert(0, str(Path(__file__).parent.parent))

from diningreview.database import AsyncSessionLocal, create_tables, engine
from diningreview.exceptions import DuplicateRestaurantError
from diningreview.schemas.user import ZIPCODE_PATTERN
from diningreview.services.restaurant_service import RestaurantService
from diningreview.store import SqlEntityStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["name", "zipcode"]
OPTIONAL_COLUMNS = ["street", "city", "state"]

_ZIP_RE = re.compile(ZIPCODE_PATTERN)


# ── Column helpers ───────────────────────────────────────────────────────────


def _clean(val: object) -> Optional[str]:
    """Strip a CSV cell; NaN and blanks become None."""
    if pd.isna(val):
        return None
    s = str(val).strip()
    return s or None


def _parse_zipcode(val: object) -> Optional[str]:
    """Keep 5-digit / ZIP+4 codes; restore leading zeros lost to numeric parsing."""
    s = _clean(val)
    if s is None:
        return None
    if s.isdigit() and len(s) < 5:
        s = s.zfill(5)
    return s if _ZIP_RE.match(s) else None


def load_rows(csv_path: Path) -> list[dict[str, Optional[str]]]:
    """Read the CSV and return the valid rows as dicts; invalid rows are logged and dropped."""
    df = pd.read_csv(csv_path, dtype=str)
    df.columns = [c.strip().lower() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"CSV is missing required columns: {', '.join(missing)}")
    for col in OPTIONAL_COLUMNS:
        if col not in df.columns:
            df[col] = None

    rows: list[dict[str, Optional[str]]] = []
    for idx, raw in df.iterrows():
        name = _clean(raw["name"])
        zipcode = _parse_zipcode(raw["zipcode"])
        if not name or not zipcode:
            logger.warning("Row %d skipped: missing name or invalid zipcode", idx)
            continue
        rows.append({
            "name": name,
            "zipcode": zipcode,
            "street": _clean(raw["street"]),
            "city": _clean(raw["city"]),
            "state": _clean(raw["state"]),
        })
    return rows


async def ingest(
    rows: list[dict[str, Optional[str]]],
    service: RestaurantService,
) -> tuple[int, int]:
    """Register rows one by one. Returns (created, skipped_duplicates)."""
    created = skipped = 0
    for row in rows:
        try:
            await service.create_restaurant(**row)
            created += 1
        except DuplicateRestaurantError as exc:
            logger.warning("%s — skipped", exc.message)
            skipped += 1
    return created, skipped


async def main(args: argparse.Namespace) -> None:
    rows = load_rows(Path(args.csv))
    logger.info("Parsed %d valid rows from %s", len(rows), args.csv)

    if args.dry_run:
        for row in rows[:10]:
            logger.info("  %s (%s)", row["name"], row["zipcode"])
        logger.info("Dry run — no DB writes.")
        return

    await create_tables()
    start = asyncio.get_running_loop().time()
    async with AsyncSessionLocal() as session:
        created, skipped = await ingest(rows, RestaurantService(SqlEntityStore(session)))
    elapsed = asyncio.get_running_loop().time() - start
    logger.info(
        "Ingest complete: %d created, %d duplicates skipped (%.1fs)",
        created, skipped, elapsed,
    )
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Bulk-register restaurants from a CSV")
    parser.add_argument("--csv", required=True, help="Path to restaurants CSV")
    parser.add_argument("--dry-run", action="store_true", help="Parse only, no DB writes")
    asyncio.run(main(parser.parse_args()))
