"""
Postal lookup service - resolve Indian pincodes to state, city and coordinates.
"""
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np

from app.schemas.geospatial import LocationPrecision, PostalEntry, ResolvedLocation
from app.utils.constants import (
    INDIA_CENTROID,
    PINCODE_DIRECTORY,
    PINCODE_PREFIX_CENTERS,
    UNKNOWN,
)
from app.utils.normalizers import clean_identifier

logger = logging.getLogger(__name__)

PINCODE_PATTERN = re.compile(r"^\d{6}$")


def clean_pincode(pincode: Any) -> Optional[str]:
    """Trimmed pincode if it is exactly six digits, else None."""
    text = clean_identifier(pincode)
    if text is None or not PINCODE_PATTERN.match(text):
        return None
    return text


def load_pincode_table(path: Union[str, Path]) -> Dict[str, Dict[str, Any]]:
    """
    Load a {pincode: {lat, lng, state, city}} JSON table.

    Entries without a six-digit key or numeric coordinates are skipped.
    A missing or unreadable file yields an empty table.
    """
    path = Path(path)
    if not path.exists():
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read pincode table {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Pincode table {path} is not a JSON object, ignoring it")
        return {}

    table = {}
    skipped = 0
    for key, entry in data.items():
        pincode = clean_pincode(key)
        if pincode is None or not isinstance(entry, dict):
            skipped += 1
            continue
        try:
            lat = float(entry["lat"])
            lng = float(entry["lng"])
        except (KeyError, TypeError, ValueError):
            skipped += 1
            continue
        table[pincode] = {
            "lat": lat,
            "lng": lng,
            "state": entry.get("state") or UNKNOWN,
            "city": entry.get("city") or UNKNOWN,
        }

    logger.info(f"Loaded {len(table)} pincodes from {path} ({skipped} skipped)")
    return table


class PostalLookup:
    """
    Resolve six-digit pincodes against an exact directory.

    Misses fall back to the centre of the pincode's two-digit postal prefix
    with a small random offset (so markers sharing a prefix do not stack),
    and finally to the centre of India.
    """

    def __init__(
        self,
        directory: Optional[Mapping[str, Mapping[str, Any]]] = None,
        prefix_centers: Optional[Mapping[str, Mapping[str, Any]]] = None,
        rng: Optional[np.random.Generator] = None,
        jitter_degrees: float = 0.05,
        attribute_prefix_state: bool = False,
    ):
        self.directory = PINCODE_DIRECTORY if directory is None else directory
        self.prefix_centers = PINCODE_PREFIX_CENTERS if prefix_centers is None else prefix_centers
        self.rng = rng if rng is not None else np.random.default_rng()
        self.jitter_degrees = jitter_degrees
        self.attribute_prefix_state = attribute_prefix_state

    @classmethod
    def with_table_file(cls, path: Union[str, Path], **kwargs) -> "PostalLookup":
        """Lookup over the built-in directory merged with a table file."""
        directory = {**PINCODE_DIRECTORY, **load_pincode_table(path)}
        return cls(directory=directory, **kwargs)

    def get_entry(self, pincode: Any) -> Optional[PostalEntry]:
        """Exact directory entry, or None."""
        code = clean_pincode(pincode)
        if code is None:
            return None

        entry = self.directory.get(code)
        if entry is None:
            return None

        return PostalEntry(
            pincode=code,
            state=entry.get("state") or UNKNOWN,
            city=entry.get("city") or UNKNOWN,
            lat=entry["lat"],
            lng=entry["lng"],
        )

    def resolve(self, pincode: Any) -> Optional[ResolvedLocation]:
        """
        Resolve a pincode to a map location.

        Args:
            pincode: Candidate pincode (trimmed before checking)

        Returns:
            ResolvedLocation tagged with its precision, or None when the
            input is not a six-digit code
        """
        code = clean_pincode(pincode)
        if code is None:
            return None

        entry = self.get_entry(code)
        if entry is not None:
            return ResolvedLocation(
                pincode=code,
                state=entry.state,
                city=entry.city,
                lat=entry.lat,
                lng=entry.lng,
                precision=LocationPrecision.EXACT,
            )

        center = self.prefix_centers.get(code[:2])
        if center is not None:
            offset_lat, offset_lng = self.rng.uniform(
                -self.jitter_degrees, self.jitter_degrees, size=2
            )
            state = center.get("state", UNKNOWN) if self.attribute_prefix_state else UNKNOWN
            return ResolvedLocation(
                pincode=code,
                state=state,
                city=UNKNOWN,
                lat=center["lat"] + float(offset_lat),
                lng=center["lng"] + float(offset_lng),
                precision=LocationPrecision.APPROXIMATE,
            )

        return ResolvedLocation(
            pincode=code,
            state=UNKNOWN,
            city=UNKNOWN,
            lat=INDIA_CENTROID["lat"],
            lng=INDIA_CENTROID["lng"],
            precision=LocationPrecision.COUNTRY,
        )
