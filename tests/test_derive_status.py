"""Tests for the pure status precedence chain."""
from datetime import datetime, timezone as dt_timezone

import pytest

from apps.fleet.models import Vehicle
from apps.maintenance.models import ServiceRecord
from apps.maintenance.status import StatusResult, delivery_date, derive_status

NOW = datetime(2024, 1, 1, 10, 0, tzinfo=dt_timezone.utc)


def _records(*statuses, durations=None):
    durations = durations or [None] * len(statuses)
    return [
        ServiceRecord(record_status=s, estimated_duration_minutes=d)
        for s, d in zip(statuses, durations)
    ]


class TestDeliveryDate:
    """Tests for delivery_date helper."""

    def test_adds_minutes_to_now(self):
        """90 minutes from 10:00 is 11:30."""
        assert delivery_date(90, NOW) == datetime(2024, 1, 1, 11, 30, tzinfo=dt_timezone.utc)

    @pytest.mark.parametrize("minutes", [None, 0, -15])
    def test_no_positive_duration(self, minutes):
        """No estimate without a positive duration."""
        assert delivery_date(minutes, NOW) is None


class TestDeriveStatus:
    """Tests for derive_status precedence rules."""

    def test_no_records_is_none(self):
        assert derive_status([], True, NOW) == StatusResult(Vehicle.STATUS_NONE)

    def test_all_completed(self):
        """Every record completed -> tamamlandi, no delivery date."""
        result = derive_status(_records("tamamlandi", "tamamlandi"), True, NOW)
        assert result.status == Vehicle.STATUS_COMPLETED
        assert result.estimated_delivery_date is None

    def test_in_progress_wins_over_detected_and_completed(self):
        result = derive_status(_records("tespit", "tamamlandi", "devam"), False, NOW)
        assert result.status == Vehicle.STATUS_IN_PROGRESS

    def test_first_in_progress_record_drives_estimate(self):
        """Records arrive newest first; the first devam record is used."""
        records = _records("tespit", "devam", "devam", durations=[None, 30, 240])
        result = derive_status(records, False, NOW)
        assert result.estimated_delivery_date == datetime(2024, 1, 1, 10, 30, tzinfo=dt_timezone.utc)

    def test_in_progress_without_duration(self):
        result = derive_status(_records("devam"), False, NOW)
        assert result == StatusResult(Vehicle.STATUS_IN_PROGRESS, None)

    def test_detected_with_peer_in_progress_is_queued(self):
        assert derive_status(_records("tespit"), True, NOW).status == Vehicle.STATUS_QUEUED

    def test_detected_without_peer_is_none(self):
        assert derive_status(_records("tespit", "tamamlandi"), False, NOW).status == Vehicle.STATUS_NONE

    def test_peer_callable_only_called_when_needed(self):
        """The peer lookup is skipped when an earlier rule matches."""
        calls = []

        def peer():
            calls.append(1)
            return True

        derive_status(_records("devam"), peer, NOW)
        derive_status(_records("tamamlandi"), peer, NOW)
        assert calls == []

        assert derive_status(_records("tespit"), peer, NOW).status == Vehicle.STATUS_QUEUED
        assert calls == [1]

    def test_result_is_known_without_error(self):
        assert derive_status([], False, NOW).is_known
