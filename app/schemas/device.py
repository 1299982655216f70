"""
Device and institute record schemas.

Raw upstream JSON is validated into these models at the ingestion boundary,
so flags, timestamps and identifiers arrive downstream with one type each.
"""
import logging
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from typing import Any, Dict, List, Mapping, Optional

from app.utils.normalizers import (
    TRAINING_FLAG_PATHS,
    any_flag,
    clean_identifier,
    coerce_flag,
    coerce_timestamp,
)

logger = logging.getLogger(__name__)


def _text_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class InstituteAddress(BaseModel):
    """Address block nested inside a device record."""
    country: Optional[str] = None
    pincode: Optional[str] = None

    class Config:
        extra = "allow"

    @field_validator("country", mode="before")
    @classmethod
    def stringify_country(cls, v):
        return _text_or_none(v)

    @field_validator("pincode", mode="before")
    @classmethod
    def clean_pincode(cls, v):
        return clean_identifier(v)


class DeviceRecord(BaseModel):
    """One onboarding/lifecycle event for a physical device."""
    record_id: Optional[str] = Field(None, alias="_id")
    unique_device_id: Optional[str] = None
    device_serial_no: Optional[str] = None

    created_at: Optional[float] = Field(None, alias="c")
    updated_at: Optional[float] = Field(None, alias="u")

    deleted: bool = False
    is_locked: bool = False
    locked_at: Optional[float] = None
    onboarding_setup: bool = False

    institute_id: Optional[str] = None
    institute_name: Optional[str] = None
    institute_type: Optional[str] = None
    linking_source: Optional[str] = None

    country: Optional[str] = None
    pincode: Optional[str] = None
    institute_address: InstituteAddress = Field(default_factory=InstituteAddress)

    meta: Dict[str, Any] = Field(default_factory=dict)
    training_required: bool = False

    class Config:
        populate_by_name = True
        extra = "allow"

    @model_validator(mode="before")
    @classmethod
    def resolve_training_flag(cls, data):
        if isinstance(data, Mapping):
            data = dict(data)
            data["training_required"] = any_flag(data, TRAINING_FLAG_PATHS)
        return data

    @field_validator("deleted", "is_locked", "onboarding_setup", mode="before")
    @classmethod
    def coerce_flags(cls, v):
        return coerce_flag(v)

    @field_validator("created_at", "updated_at", "locked_at", mode="before")
    @classmethod
    def coerce_timestamps(cls, v):
        return coerce_timestamp(v)

    @field_validator(
        "record_id", "unique_device_id", "institute_id", "pincode", mode="before"
    )
    @classmethod
    def clean_identifiers(cls, v):
        return clean_identifier(v)

    @field_validator(
        "device_serial_no", "institute_name", "institute_type", "linking_source", "country",
        mode="before",
    )
    @classmethod
    def stringify_text(cls, v):
        return _text_or_none(v)

    @field_validator("institute_address", mode="before")
    @classmethod
    def default_address(cls, v):
        return v if isinstance(v, (Mapping, InstituteAddress)) else {}

    @field_validator("meta", mode="before")
    @classmethod
    def default_meta(cls, v):
        return v if isinstance(v, Mapping) else {}

    @property
    def device_key(self) -> Optional[str]:
        """Identity used when counting distinct devices."""
        return self.unique_device_id or self.record_id

    @property
    def effective_pincode(self) -> Optional[str]:
        return self.pincode or self.institute_address.pincode

    @property
    def effective_country(self) -> Optional[str]:
        return self.country or self.institute_address.country


class MergedRecord(DeviceRecord):
    """Device record after the institute-metadata join."""
    institute_matched: bool = False


class InstituteMetadata(BaseModel):
    """Canonical institute details from the batch lookup."""
    name: Optional[str] = None
    country: Optional[str] = None
    pincode: Optional[str] = None
    institution_type: Optional[str] = None
    institute_type: Optional[str] = None

    class Config:
        extra = "allow"

    @field_validator("pincode", mode="before")
    @classmethod
    def clean_pincode(cls, v):
        return clean_identifier(v)

    @field_validator("name", "country", "institution_type", "institute_type", mode="before")
    @classmethod
    def stringify_text(cls, v):
        return _text_or_none(v)

    @property
    def resolved_type(self) -> Optional[str]:
        return self.institution_type or self.institute_type


def sanitize_device_records(raw_items: List[Any]) -> List[DeviceRecord]:
    """
    Validate raw upstream device records.

    Items that are not JSON objects, or that still fail validation after
    coercion, are dropped with a warning instead of aborting the batch.
    """
    records = []
    for item in raw_items:
        if not isinstance(item, Mapping):
            logger.warning(f"Skipping non-object device record: {item!r:.80}")
            continue
        try:
            records.append(DeviceRecord.model_validate(item))
        except ValidationError as e:
            logger.warning(f"Skipping malformed device record {item.get('_id')}: {e}")
    return records


def sanitize_institute_map(raw_map: Any) -> Dict[str, InstituteMetadata]:
    """Validate the batch institute lookup; keys are kept verbatim."""
    if not isinstance(raw_map, Mapping):
        return {}

    institutes = {}
    for key, value in raw_map.items():
        if not isinstance(value, Mapping):
            continue
        try:
            institutes[str(key)] = InstituteMetadata.model_validate(value)
        except ValidationError as e:
            logger.warning(f"Skipping malformed institute details for {key}: {e}")
    return institutes
