"""
Named behaviour switches for the aggregation pipeline.
"""
from dataclasses import dataclass
from typing import Optional

from app.config import Settings, MissingTimestampPolicy, settings as default_settings


@dataclass(frozen=True)
class PipelinePolicy:
    """
    Every place where two reasonable readings of the dashboard rules exist.

    Attributes:
        missing_timestamp: Window outcome for a record with no usable timestamp
        locked_requires_timestamp: A locked device with no locked_at never counts
        require_onboarding_setup: Registered also needs onboarding_setup == True
        normalize_unmatched_country: Apply country inference and normalisation
            to records with no institute match too
        attribute_prefix_state: Prefix-approximated pincodes report the
            prefix's nominal state instead of "Unknown"
        geo_uses_date_window: Geo distribution honours the metrics date window
        high_volume_threshold: Institutes with strictly more devices are high-volume
        exclude_test_devices: Drop devices whose serial contains the test marker
        test_serial_marker: Case-insensitive substring marking test devices
        jitter_degrees: Half-width of the marker jitter on approximate pincodes
    """
    missing_timestamp: MissingTimestampPolicy = MissingTimestampPolicy.INCLUDE
    locked_requires_timestamp: bool = True
    require_onboarding_setup: bool = False
    normalize_unmatched_country: bool = True
    attribute_prefix_state: bool = False
    geo_uses_date_window: bool = False
    high_volume_threshold: int = 50
    exclude_test_devices: bool = True
    test_serial_marker: str = "test"
    jitter_degrees: float = 0.05

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "PipelinePolicy":
        config = config or default_settings
        return cls(
            missing_timestamp=config.MISSING_TIMESTAMP_POLICY,
            locked_requires_timestamp=config.LOCKED_REQUIRES_TIMESTAMP,
            require_onboarding_setup=config.REQUIRE_ONBOARDING_SETUP,
            normalize_unmatched_country=config.NORMALIZE_UNMATCHED_COUNTRY,
            attribute_prefix_state=config.ATTRIBUTE_PREFIX_STATE,
            geo_uses_date_window=config.GEO_USES_DATE_WINDOW,
            high_volume_threshold=config.HIGH_VOLUME_THRESHOLD,
            exclude_test_devices=config.EXCLUDE_TEST_DEVICES,
            test_serial_marker=config.TEST_SERIAL_MARKER,
            jitter_degrees=config.JITTER_DEGREES,
        )


DEFAULT_POLICY = PipelinePolicy()
