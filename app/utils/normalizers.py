"""
Value normalisation helpers shared by the ingestion boundary and the aggregators.
"""
import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from app.utils.constants import COUNTRY_ALIASES, CONNECTOR_WORDS

logger = logging.getLogger(__name__)


def normalize_place_name(raw: Optional[str]) -> str:
    """
    Canonicalise a free-text country or state name for display.

    Known abbreviations are expanded ("UK" -> "United Kingdom"), everything
    else is title-cased token by token with connector words kept lower-case
    unless they open the name.

    Args:
        raw: Name as delivered upstream (any casing, stray whitespace)

    Returns:
        Display form, or an empty string for empty input
    """
    if raw is None:
        return ""

    tokens = str(raw).split()
    if not tokens:
        return ""

    collapsed = " ".join(tokens)
    alias = COUNTRY_ALIASES.get(collapsed.upper())
    if alias:
        return alias

    words = []
    for index, token in enumerate(tokens):
        lower = token.lower()
        if index > 0 and lower in CONNECTOR_WORDS:
            words.append(lower)
        else:
            words.append(lower[:1].upper() + lower[1:])
    return " ".join(words)


def coerce_flag(value: Any) -> bool:
    """True only for boolean True or the string "true" (any casing)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def coerce_timestamp(value: Any) -> Optional[float]:
    """Numeric or numeric-string timestamp as float; anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def coerce_count(value: Any, name: str = "count") -> int:
    """
    Parse an upstream counter; missing values are 0.

    Numeric strings such as "12" or "12.0" are accepted. Anything else is
    logged and read as 0 so one bad counter cannot abort a load.
    """
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        logger.warning(f"Ignoring non-numeric {name}: {value!r}")
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"Ignoring non-numeric {name}: {value!r}")
        return 0


def clean_identifier(value: Any) -> Optional[str]:
    """Stringify and trim an identifier-like value; blanks become None."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def field_path(*keys: str) -> Callable[[Mapping[str, Any]], Any]:
    """Accessor reading a (possibly nested) key path from a raw record."""
    def accessor(record: Mapping[str, Any]) -> Any:
        current: Any = record
        for key in keys:
            if not isinstance(current, Mapping):
                return None
            current = current.get(key)
        return current

    accessor.__name__ = ".".join(keys)
    return accessor


def first_present(
    record: Mapping[str, Any],
    accessors: Sequence[Callable[[Mapping[str, Any]], Any]],
) -> Any:
    """Value of the first accessor returning something other than None/''."""
    for accessor in accessors:
        value = accessor(record)
        if value is not None and value != "":
            return value
    return None


def any_flag(
    record: Mapping[str, Any],
    accessors: Iterable[Callable[[Mapping[str, Any]], Any]],
) -> bool:
    """True when any accessor yields a truthy flag (True or "true")."""
    return any(coerce_flag(accessor(record)) for accessor in accessors)


# Locations the training flag has been observed under, in precedence order
TRAINING_FLAG_PATHS = (
    field_path("training_required"),
    field_path("meta", "training_required"),
    field_path("meta", "is_training_required"),
)
