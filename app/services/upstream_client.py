"""
HTTP client for the device-linking API.

Only transport and envelope unwrapping live here; callers decide how to
degrade when a call fails.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from app.config import Settings, settings as default_settings
from app.utils.normalizers import coerce_count

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """An upstream call failed (transport, HTTP status or payload shape)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DeviceDataClient:
    """Fetch device records, institute details and stats from the upstream API."""

    def __init__(self, config: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.config = config or default_settings
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = self.config.upstream_url(path)
        try:
            response = self.session.request(
                method, url, timeout=self.config.REQUEST_TIMEOUT_SECONDS, **kwargs
            )
        except requests.RequestException as e:
            raise UpstreamError(f"{method} {url} failed: {e}") from e

        if not response.ok:
            raise UpstreamError(
                f"{method} {url} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(f"{method} {url} returned invalid JSON") from e

    @staticmethod
    def _payload(body: Any, require_status: bool = False) -> Any:
        if not isinstance(body, dict):
            raise UpstreamError("Unexpected response envelope")
        if require_status and not body.get("status"):
            raise UpstreamError(body.get("message") or "Upstream reported failure")
        return body.get("obj")

    def fetch_device_records(self) -> Tuple[List[Any], int]:
        """
        Fetch every linked device.

        Returns:
            Tuple of (raw device records, codes generated today)
        """
        obj = self._payload(self._request("GET", self.config.DEVICE_DETAILS_PATH))

        if isinstance(obj, dict) and isinstance(obj.get("data"), list):
            return obj["data"], coerce_count(obj.get("codes_generated_today"), "codes_generated_today")
        if isinstance(obj, list):
            return obj, 0

        logger.warning("Device details response carried no record list")
        return [], 0

    def fetch_active_devices(self) -> Dict[str, Any]:
        """Live device counts keyed by pincode or institute id."""
        obj = self._payload(self._request("GET", self.config.ACTIVE_DEVICES_PATH), require_status=True)
        return obj if isinstance(obj, dict) else {}

    def fetch_institute_details(self, institute_ids: List[str]) -> Dict[str, Any]:
        """Batch institute lookup; ids missing from the result have no metadata."""
        if not institute_ids:
            return {}
        body = self._request(
            "POST",
            self.config.INSTITUTE_BATCH_PATH,
            json={"institute_ids": institute_ids},
        )
        obj = self._payload(body)
        return obj if isinstance(obj, dict) else {}

    def fetch_link_stats(self, start_timestamp: float, end_timestamp: float) -> Dict[str, Any]:
        """Linking/delinking totals for an inclusive window of epoch seconds."""
        body = self._request(
            "GET",
            self.config.LINK_STATS_PATH,
            params={"start_timestamp": start_timestamp, "end_timestamp": end_timestamp},
        )
        obj = self._payload(body, require_status=True)
        if not isinstance(obj, dict):
            raise UpstreamError("Link stats response carried no counts")
        return obj

    def set_lock_state(self, device_serial_no: str, is_locked: bool) -> Dict[str, Any]:
        """Ask the upstream API to lock or unlock a device."""
        body = self._request(
            "POST",
            self.config.LOCK_DEVICE_PATH,
            json={"device_serial_no": device_serial_no, "is_locked": is_locked},
        )
        obj = self._payload(body, require_status=True)
        return obj if isinstance(obj, dict) else {}
