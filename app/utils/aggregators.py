"""
Data aggregation utility functions.
"""
import pandas as pd
from typing import Any, Dict, List


def summarize_city_points(points: List[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    """
    Collapse per-device city points into one entry per city.

    Args:
        points: Rows with city, state, lat and lng keys (one per device)

    Returns:
        {city: {count, lat, lng, state}} where lat/lng are the arithmetic
        mean of every contributing point and state is the first one seen
    """
    if not points:
        return {}

    df = pd.DataFrame(points, columns=["city", "state", "lat", "lng"])
    grouped = df.groupby("city", sort=False).agg(
        count=("lat", "size"),
        lat=("lat", "mean"),
        lng=("lng", "mean"),
        state=("state", "first"),
    )

    return {
        city: {
            "count": int(row["count"]),
            "lat": float(row["lat"]),
            "lng": float(row["lng"]),
            "state": row["state"],
        }
        for city, row in grouped.iterrows()
    }


def rank_by_count(entries: List[Dict[str, Any]], count_key: str = "count") -> List[Dict[str, Any]]:
    """
    Sort entries descending by count, keeping first-seen order among ties.

    Args:
        entries: Dictionaries carrying a numeric count
        count_key: Name of the count field

    Returns:
        New list, highest count first
    """
    if not entries:
        return []

    df = pd.DataFrame(entries)
    df = df.sort_values(count_key, ascending=False, kind="stable")
    return [
        {key: (value.item() if hasattr(value, "item") else value) for key, value in row.items()}
        for row in df.to_dict(orient="records")
    ]


def normalize_intensity(values: List[float], max_val: float = 100) -> List[float]:
    """
    Scale values to 0-max_val relative to the largest value, for marker intensity.

    Args:
        values: List of values to normalize
        max_val: Maximum value in output scale

    Returns:
        Normalized values
    """
    if not values:
        return []

    top = max(values)
    if top <= 0:
        return [0.0] * len(values)

    return [round(v / top * max_val, 2) for v in values]
