"""
Application configuration settings.
"""
from pydantic_settings import BaseSettings
from pathlib import Path
from typing import List, Optional
from enum import Enum


class MissingTimestampPolicy(str, Enum):
    """How the date window treats a record with no usable timestamp."""
    INCLUDE = "include"
    EXCLUDE = "exclude"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Upstream device-linking API
    UPSTREAM_BASE_URL: str = "http://localhost:8080/institute-ifps"
    DEVICE_DETAILS_PATH: str = "/all/ifps/details"
    ACTIVE_DEVICES_PATH: str = "/active-devices-pincode-wise"
    INSTITUTE_BATCH_PATH: str = "/institute/details/batch"
    LINK_STATS_PATH: str = "/linking-delinking-stats"
    LOCK_DEVICE_PATH: str = "/device/lock"
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # Geography data (JSON produced by the pincode CSV conversion)
    PINCODE_TABLE_PATH: str = "data/pincode_coordinates.json"

    # Pipeline
    HIGH_VOLUME_THRESHOLD: int = 50
    EXCLUDE_TEST_DEVICES: bool = True
    TEST_SERIAL_MARKER: str = "test"
    DASHBOARD_TIMEZONE: str = "UTC"
    DEFAULT_START_DATE: str = "2020-01-01"

    # Pipeline policies
    MISSING_TIMESTAMP_POLICY: MissingTimestampPolicy = MissingTimestampPolicy.INCLUDE
    LOCKED_REQUIRES_TIMESTAMP: bool = True
    REQUIRE_ONBOARDING_SETUP: bool = False
    NORMALIZE_UNMATCHED_COUNTRY: bool = True
    ATTRIBUTE_PREFIX_STATE: bool = False
    GEO_USES_DATE_WINDOW: bool = False
    JITTER_DEGREES: float = 0.05
    JITTER_SEED: Optional[int] = None

    # API settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Device Onboarding Analytics"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    def upstream_url(self, path: str) -> str:
        """Join the upstream base URL with an endpoint path."""
        return f"{self.UPSTREAM_BASE_URL.rstrip('/')}/{path.lstrip('/')}"

    @property
    def base_dir(self) -> Path:
        """Get base directory of the project."""
        return Path(__file__).parent.parent

    @property
    def pincode_table_file(self) -> Path:
        """Absolute path of the optional pincode table."""
        path = Path(self.PINCODE_TABLE_PATH)
        return path if path.is_absolute() else self.base_dir / path

    class Config:
        env_file = ".env"
        extra = "allow"


# Global settings instance
settings = Settings()
