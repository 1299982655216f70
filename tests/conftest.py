"""
Shared fixtures: a seeded random generator, lookup tables and a dashboard
service wired to a fake upstream client so no test touches the network.
"""
from datetime import timezone

import numpy as np
import pytest

from app.schemas.device import InstituteMetadata
from app.services.dashboard_service import DashboardService
from app.services.pipeline_policy import PipelinePolicy
from app.services.postal_lookup import PostalLookup
from tests.factories import FakeClient, raw_record


@pytest.fixture
def rng():
    """Seeded generator so jittered coordinates are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def postal_lookup(rng):
    return PostalLookup(rng=rng)


@pytest.fixture
def policy():
    return PipelinePolicy()


@pytest.fixture
def institute_map():
    return {
        "I1": InstituteMetadata(
            name="Springfield Public School",
            country="india",
            pincode="110001",
            institution_type="School",
        ),
        "I2": InstituteMetadata(name="Apex Coaching", pincode="400001", institute_type="Coaching Centre"),
    }


@pytest.fixture
def fake_client():
    return FakeClient(
        records=[
            raw_record(),
            raw_record(_id="rec-2", unique_device_id="dev-2", device_serial_no="SN-0002", institute_id="I2",
                       institute_type=None, linking_source="ADMIN_WEB"),
            raw_record(_id="rec-3", unique_device_id="dev-3", device_serial_no="TEST-99", institute_id="I1"),
        ],
        institutes={
            "I1": {"name": "Springfield Public School", "country": "india", "pincode": "110001",
                   "institution_type": "School"},
            "I2": {"name": "Apex Coaching", "pincode": "400001", "institute_type": "Coaching Centre"},
        },
        active={"110001": 4, "I2": "3", "560001": 1},
        link_stats={"delinking_count": 2, "linking_count": 9},
        codes_generated_today=5,
    )


@pytest.fixture
def service(fake_client, postal_lookup, policy):
    return DashboardService(client=fake_client, postal_lookup=postal_lookup, policy=policy, tz=timezone.utc)
