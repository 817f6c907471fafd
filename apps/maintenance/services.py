"""
Record lifecycle. Every write to a record and the vehicle status it implies
happen in one transaction.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from django.db import transaction
from django.utils import timezone

from apps.fleet.models import Vehicle
from .models import ServiceRecord
from .status import handle_record_status_change, update_vehicle_status_from_records

logger = logging.getLogger(__name__)

VALID_RECORD_STATUSES = {value for value, _ in ServiceRecord.STATUS_CHOICES}


def _stamp_completion(record: ServiceRecord, now: datetime) -> None:
    if record.record_status == ServiceRecord.STATUS_COMPLETED:
        if record.completed_at is None:
            record.completed_at = now
    else:
        record.completed_at = None


def _carry_to_vehicle(record: ServiceRecord, now: datetime) -> None:
    # A record without an odometer reading must not wipe the vehicle's km
    updates = {"updated_at": now}
    if record.km_at_service:
        updates["current_km"] = record.km_at_service
    if record.technician:
        updates["assigned_technician"] = record.technician
    Vehicle.objects.filter(pk=record.vehicle_id).update(**updates)


def create_record(record: ServiceRecord, user=None, now: Optional[datetime] = None) -> ServiceRecord:
    now = now or timezone.now()

    with transaction.atomic():
        if user is not None and getattr(user, "is_authenticated", False):
            record.created_by = user
        _stamp_completion(record, now)
        record.save()
        _carry_to_vehicle(record, now)

        handle_record_status_change(
            record.vehicle_id,
            record.record_status,
            record.estimated_duration_minutes,
            now=now,
        )

    logger.info("Created service record %s for vehicle %s (%s)", record.pk, record.vehicle_id, record.record_status)
    return record


def update_record(record: ServiceRecord, now: Optional[datetime] = None) -> ServiceRecord:
    """
    Save an edited record. Vehicle statuses are only touched when the record
    status actually changed, so editing the title or costs of running work
    keeps its delivery estimate.
    """
    now = now or timezone.now()

    with transaction.atomic():
        previous_status = (
            ServiceRecord.objects.filter(pk=record.pk)
            .values_list("record_status", flat=True)
            .first()
        )
        _stamp_completion(record, now)
        record.save()
        _carry_to_vehicle(record, now)

        if previous_status != record.record_status:
            handle_record_status_change(
                record.vehicle_id,
                record.record_status,
                record.estimated_duration_minutes,
                now=now,
            )
    return record


def set_record_status(record: ServiceRecord, new_status: str, now: Optional[datetime] = None) -> ServiceRecord:
    if new_status not in VALID_RECORD_STATUSES:
        raise ValueError(f"Unknown record status: {new_status!r}")

    now = now or timezone.now()

    with transaction.atomic():
        record.record_status = new_status
        _stamp_completion(record, now)
        record.save(update_fields=["record_status", "completed_at"])
        handle_record_status_change(
            record.vehicle_id,
            new_status,
            record.estimated_duration_minutes,
            now=now,
        )

    logger.info("Service record %s set to %s", record.pk, new_status)
    return record


def delete_record(record: ServiceRecord) -> None:
    vehicle_id = record.vehicle_id
    with transaction.atomic():
        record.delete()
        update_vehicle_status_from_records(vehicle_id)
