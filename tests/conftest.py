from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from apps.fleet.models import Vehicle
from apps.maintenance.models import ServiceRecord

NOW = datetime(2024, 1, 1, 10, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_vehicle(db):
    counter = {"n": 0}

    def _make(status=Vehicle.STATUS_NONE, **kwargs):
        counter["n"] += 1
        kwargs.setdefault("plate_number", f"34ABC{counter['n']:03d}")
        kwargs.setdefault("brand", "Fiat")
        kwargs.setdefault("model", "Egea")
        return Vehicle.objects.create(status=status, **kwargs)

    return _make


@pytest.fixture
def make_record(db):
    def _make(vehicle, record_status=ServiceRecord.STATUS_DETECTED, days_ago=0, **kwargs):
        kwargs.setdefault("title", "Brake pads")
        kwargs.setdefault("service_date", NOW - timedelta(days=days_ago))
        return ServiceRecord.objects.create(vehicle=vehicle, record_status=record_status, **kwargs)

    return _make
