"""
Record merger service - join device records with institute metadata.
"""
import logging
from typing import Dict, Iterable, List, Mapping, Optional

from app.schemas.device import DeviceRecord, InstituteMetadata, MergedRecord
from app.utils.constants import INDIA, UNKNOWN_COUNTRY_VALUES
from app.utils.normalizers import normalize_place_name

logger = logging.getLogger(__name__)


def is_test_device(record: DeviceRecord, marker: str = "test") -> bool:
    """True when the serial number contains the marker, ignoring case."""
    serial = record.device_serial_no
    return bool(serial) and marker.lower() in serial.lower()


def exclude_test_devices(records: Iterable[DeviceRecord], marker: str = "test") -> List[DeviceRecord]:
    """Drop test devices ahead of the merge."""
    return [r for r in records if not is_test_device(r, marker)]


def find_institute(
    institute_map: Mapping[str, InstituteMetadata],
    institute_id: Optional[str],
) -> Optional[InstituteMetadata]:
    """
    Look up institute details by id.

    Tries the trimmed id as an exact key first, then scans for a key that
    matches once its own whitespace is trimmed.
    """
    if institute_id is None:
        return None

    key = str(institute_id).strip()
    if not key:
        return None

    details = institute_map.get(key)
    if details is not None:
        return details

    for candidate, candidate_details in institute_map.items():
        if str(candidate).strip() == key:
            return candidate_details
    return None


def infer_country(raw_country: Optional[str], pincode: Optional[str]) -> Optional[str]:
    """Unset country with a six-character pincode is taken to be India."""
    unset = not raw_country or raw_country.strip().lower() in UNKNOWN_COUNTRY_VALUES
    if unset and pincode and len(str(pincode)) == 6:
        return INDIA
    return raw_country


def resolve_country(raw_country: Optional[str], pincode: Optional[str]) -> Optional[str]:
    """Country inference followed by display normalisation; placeholders become None."""
    country = infer_country(raw_country, pincode)
    if country and country.strip().lower() in UNKNOWN_COUNTRY_VALUES:
        return None
    return normalize_place_name(country) or None


class RecordMerger:
    """Backfill geography and organization type from institute metadata."""

    def __init__(self, normalize_unmatched_country: bool = True):
        self.normalize_unmatched_country = normalize_unmatched_country

    def merge(
        self,
        records: Iterable[DeviceRecord],
        institute_map: Mapping[str, InstituteMetadata],
    ) -> List[MergedRecord]:
        """
        Merge every record with its institute's details.

        Order and cardinality are preserved; records without a match pass
        through (normalised or untouched depending on the policy).
        """
        return [self.merge_record(record, institute_map) for record in records]

    def merge_record(
        self,
        record: DeviceRecord,
        institute_map: Mapping[str, InstituteMetadata],
    ) -> MergedRecord:
        details = find_institute(institute_map, record.institute_id)
        data = record.model_dump()

        if details is not None:
            address = record.institute_address
            pincode = details.pincode or address.pincode or record.pincode
            country = resolve_country(details.country or address.country, pincode)
            data.update(
                institute_name=details.name or record.institute_name,
                institute_type=details.resolved_type or record.institute_type,
                pincode=pincode,
                country=country,
                institute_address={**address.model_dump(), "pincode": pincode, "country": country},
                institute_matched=True,
            )
        elif self.normalize_unmatched_country:
            pincode = record.effective_pincode
            data.update(
                pincode=pincode,
                country=resolve_country(record.effective_country, pincode),
            )

        return MergedRecord.model_validate(data)


def collect_institute_ids(records: Iterable[DeviceRecord], extra_ids: Iterable[str] = ()) -> List[str]:
    """Distinct institute ids in first-seen order, for the batch lookup."""
    seen: Dict[str, None] = {}
    for record in records:
        if record.institute_id:
            seen.setdefault(record.institute_id, None)
    for key in extra_ids:
        text = str(key).strip()
        if text:
            seen.setdefault(text, None)
    return list(seen)
