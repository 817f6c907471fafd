"""Tests for the fleet and service record views."""
import pytest
from django.urls import reverse

from apps.fleet.models import Vehicle
from apps.maintenance.models import ServiceRecord

pytestmark = pytest.mark.django_db


class TestLoginRequired:
    """Every page redirects anonymous users to the login page."""

    @pytest.mark.parametrize(
        "name",
        ["core:dashboard", "fleet:vehicle_list", "maintenance:record_list", "reports:index"],
    )
    def test_redirects_to_login(self, client, name):
        resp = client.get(reverse(name))
        assert resp.status_code == 302
        assert reverse("login") in resp["Location"]


class TestVehicleViews:
    """Tests for vehicle list/detail/create/scan."""

    def test_list_recalculates_statuses(self, admin_client, make_vehicle, make_record):
        v = make_vehicle(Vehicle.STATUS_QUEUED)
        make_record(v, ServiceRecord.STATUS_COMPLETED)

        resp = admin_client.get(reverse("fleet:vehicle_list"))

        assert resp.status_code == 200
        v.refresh_from_db()
        assert v.status == Vehicle.STATUS_COMPLETED

    def test_list_recalculation_can_be_disabled(self, admin_client, make_vehicle, make_record, settings):
        settings.FLEET_RECALCULATE_ON_LIST = False
        v = make_vehicle(Vehicle.STATUS_QUEUED)
        make_record(v, ServiceRecord.STATUS_COMPLETED)

        admin_client.get(reverse("fleet:vehicle_list"))

        v.refresh_from_db()
        assert v.status == Vehicle.STATUS_QUEUED

    def test_list_filters_by_status(self, admin_client, make_vehicle, settings):
        settings.FLEET_RECALCULATE_ON_LIST = False
        busy = make_vehicle(Vehicle.STATUS_IN_PROGRESS)
        make_vehicle(Vehicle.STATUS_NONE)

        resp = admin_client.get(reverse("fleet:vehicle_list"), {"status": Vehicle.STATUS_IN_PROGRESS})

        assert [v.pk for v in resp.context["vehicles"]] == [busy.pk]

    def test_list_counts_open_records(self, admin_client, make_vehicle, make_record):
        v = make_vehicle()
        make_record(v, ServiceRecord.STATUS_DETECTED)
        make_record(v, ServiceRecord.STATUS_IN_PROGRESS)
        make_record(v, ServiceRecord.STATUS_COMPLETED)

        resp = admin_client.get(reverse("fleet:vehicle_list"))

        row = next(x for x in resp.context["vehicles"] if x.pk == v.pk)
        assert row.open_records == 2

    def test_detail_refreshes_status(self, admin_client, make_vehicle, make_record):
        v = make_vehicle(Vehicle.STATUS_NONE)
        make_record(v, ServiceRecord.STATUS_IN_PROGRESS)

        resp = admin_client.get(reverse("fleet:vehicle_detail", args=[v.pk]))

        assert resp.status_code == 200
        assert resp.context["vehicle"].status == Vehicle.STATUS_IN_PROGRESS

    def test_detail_missing_vehicle(self, admin_client):
        assert admin_client.get(reverse("fleet:vehicle_detail", args=[9999])).status_code == 404

    def test_create_normalizes_plate_and_starts_idle(self, admin_client):
        resp = admin_client.post(reverse("fleet:vehicle_create"), {
            "plate_number": "34 abc 123",
            "brand": "Renault",
            "model": "Clio",
            "current_km": 45000,
            "qr_code": "3",
        })

        v = Vehicle.objects.get()
        assert resp.status_code == 302
        assert v.plate_number == "34ABC123"
        assert v.status == Vehicle.STATUS_NONE

    def test_delete(self, admin_client, make_vehicle, make_record):
        v = make_vehicle()
        make_record(v)
        resp = admin_client.post(reverse("fleet:vehicle_delete", args=[v.pk]))
        assert resp.status_code == 302
        assert not Vehicle.objects.exists()
        assert not ServiceRecord.objects.exists()

    def test_scan_redirects_to_vehicle(self, admin_client, make_vehicle):
        v = make_vehicle(qr_code="5")
        resp = admin_client.get(reverse("fleet:vehicle_scan"), {"code": "SLOT-5"})
        assert resp.status_code == 302
        assert resp["Location"] == reverse("fleet:vehicle_detail", args=[v.pk])

    def test_scan_without_match(self, admin_client):
        resp = admin_client.get(reverse("fleet:vehicle_scan"), {"code": "SLOT-5"})
        assert resp["Location"] == reverse("fleet:vehicle_list")


class TestRecordViews:
    """Tests for service record create/status/delete views."""

    def test_create_runs_status_change(self, admin_client, make_vehicle):
        waiting = make_vehicle(Vehicle.STATUS_NONE)
        ServiceRecord.objects.create(vehicle=waiting, title="Noise")
        v = make_vehicle()

        resp = admin_client.post(reverse("maintenance:record_create"), {
            "vehicle": v.pk,
            "title": "Timing belt",
            "service_date": "2024-01-01T10:00",
            "km_at_service": 98000,
            "record_status": ServiceRecord.STATUS_IN_PROGRESS,
            "estimated_duration_minutes": 120,
        })

        assert resp.status_code == 302
        assert resp["Location"] == reverse("fleet:vehicle_detail", args=[v.pk])
        v.refresh_from_db()
        waiting.refresh_from_db()
        assert v.status == Vehicle.STATUS_IN_PROGRESS
        assert v.current_km == 98000
        assert waiting.status == Vehicle.STATUS_QUEUED

    def test_create_rejects_zero_duration(self, admin_client, make_vehicle):
        v = make_vehicle()
        resp = admin_client.post(reverse("maintenance:record_create"), {
            "vehicle": v.pk,
            "title": "Timing belt",
            "service_date": "2024-01-01T10:00",
            "km_at_service": 98000,
            "record_status": ServiceRecord.STATUS_IN_PROGRESS,
            "estimated_duration_minutes": 0,
        })
        assert resp.status_code == 200
        assert "estimated_duration_minutes" in resp.context["form"].errors
        assert not ServiceRecord.objects.exists()

    def test_create_rejects_missing_km(self, admin_client, make_vehicle):
        v = make_vehicle(current_km=120000)
        resp = admin_client.post(reverse("maintenance:record_create"), {
            "vehicle": v.pk,
            "title": "Noise",
            "service_date": "2024-01-01T10:00",
            "km_at_service": 0,
            "record_status": ServiceRecord.STATUS_DETECTED,
        })
        assert resp.status_code == 200
        assert "km_at_service" in resp.context["form"].errors
        v.refresh_from_db()
        assert v.current_km == 120000

    def test_create_prefills_vehicle(self, admin_client, make_vehicle):
        v = make_vehicle(current_km=1500)
        resp = admin_client.get(reverse("maintenance:record_create"), {"vehicle": v.pk})
        assert resp.context["form"].initial["km_at_service"] == 1500

    def test_status_button(self, admin_client, make_vehicle, make_record):
        v = make_vehicle(Vehicle.STATUS_IN_PROGRESS)
        record = make_record(v, ServiceRecord.STATUS_IN_PROGRESS)

        url = reverse("maintenance:record_set_status", args=[record.pk, ServiceRecord.STATUS_COMPLETED])
        resp = admin_client.post(url)

        assert resp.status_code == 302
        record.refresh_from_db()
        v.refresh_from_db()
        assert record.record_status == ServiceRecord.STATUS_COMPLETED
        assert record.completed_at is not None
        assert v.status == Vehicle.STATUS_COMPLETED

    def test_status_button_requires_post(self, admin_client, make_vehicle, make_record):
        record = make_record(make_vehicle())
        url = reverse("maintenance:record_set_status", args=[record.pk, ServiceRecord.STATUS_IN_PROGRESS])
        assert admin_client.get(url).status_code == 405

    def test_status_button_unknown_status(self, admin_client, make_vehicle, make_record):
        record = make_record(make_vehicle())
        url = reverse("maintenance:record_set_status", args=[record.pk, "bitti"])
        assert admin_client.post(url).status_code == 400

    def test_delete_recomputes_vehicle(self, admin_client, make_vehicle, make_record):
        v = make_vehicle(Vehicle.STATUS_IN_PROGRESS)
        record = make_record(v, ServiceRecord.STATUS_IN_PROGRESS)
        make_record(v, ServiceRecord.STATUS_COMPLETED)

        resp = admin_client.post(reverse("maintenance:record_delete", args=[record.pk]))

        assert resp.status_code == 302
        v.refresh_from_db()
        assert v.status == Vehicle.STATUS_COMPLETED

    def test_list_filters_by_status(self, admin_client, make_vehicle, make_record):
        v = make_vehicle()
        make_record(v, ServiceRecord.STATUS_DETECTED)
        done = make_record(v, ServiceRecord.STATUS_COMPLETED)

        resp = admin_client.get(reverse("maintenance:record_list"), {"status": ServiceRecord.STATUS_COMPLETED})

        assert [r.pk for r in resp.context["records"]] == [done.pk]
