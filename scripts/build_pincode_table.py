"""
Pincode table build script.

Converts the India Post pincode directory CSV (circlename, regionname, ...,
pincode, ..., district, statename, latitude, longitude) into the
{pincode: {lat, lng, state, city}} JSON table read at API start-up.
Existing entries in the target file are kept unless the CSV replaces them.
"""
import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import pandas as pd
from tqdm import tqdm

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.config import settings
from app.services.postal_lookup import clean_pincode, load_pincode_table

# Setup logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def clean_string(value) -> str:
    """Clean string values."""
    if pd.isna(value):
        return ""
    return str(value).strip()


def clean_coordinate(value) -> Optional[float]:
    """Parse a latitude/longitude cell; "NA" and blanks become None."""
    if pd.isna(value):
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


def build_table(df: pd.DataFrame) -> Tuple[Dict[str, Dict[str, Any]], int]:
    """
    Convert directory rows into pincode entries.

    Later rows for the same pincode overwrite earlier ones.

    Returns:
        Tuple of (table, skipped row count)
    """
    table = {}
    skipped = 0

    for _, row in tqdm(df.iterrows(), total=len(df), desc="    Rows"):
        pincode = clean_pincode(clean_string(row.get('pincode')))
        lat = clean_coordinate(row.get('latitude'))
        lng = clean_coordinate(row.get('longitude'))

        if pincode is None or lat is None or lng is None:
            skipped += 1
            continue

        table[pincode] = {
            "lat": lat,
            "lng": lng,
            "state": clean_string(row.get('statename')),
            "city": clean_string(row.get('district')),
        }

    return table, skipped


def update_pincode_table(csv_file: Path, target_file: Path) -> int:
    """Merge the CSV into the target JSON table; returns the final size."""
    logger.info(f"Reading pincode data from {csv_file}...")
    df = pd.read_csv(csv_file, dtype=str, low_memory=False)

    updates, skipped = build_table(df)
    logger.info(f"Parsed {len(updates)} valid pincodes ({skipped} rows skipped)")

    existing = load_pincode_table(target_file)
    if existing:
        logger.info(f"Read {len(existing)} existing pincodes")

    merged = {**existing, **updates}

    target_file.parent.mkdir(parents=True, exist_ok=True)
    with open(target_file, 'w', encoding='utf-8') as f:
        json.dump(merged, f, indent=2)

    logger.info(f"✅ Wrote {len(merged)} pincodes to {target_file}")
    return len(merged)


def main():
    parser = argparse.ArgumentParser(description="Build the pincode coordinates table from a CSV export")
    parser.add_argument("csv_file", type=Path, help="Pincode directory CSV")
    parser.add_argument(
        "--output",
        type=Path,
        default=settings.pincode_table_file,
        help="Target JSON table (default: PINCODE_TABLE_PATH)",
    )
    args = parser.parse_args()

    if not args.csv_file.exists():
        logger.error(f"CSV file not found: {args.csv_file}")
        sys.exit(1)

    update_pincode_table(args.csv_file, args.output)


if __name__ == "__main__":
    main()
