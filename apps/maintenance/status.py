from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence, Union

from django.db import DatabaseError, transaction
from django.utils import timezone

from apps.fleet.models import Vehicle
from .models import ServiceRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusResult:
    status: str
    estimated_delivery_date: Optional[datetime] = None
    # Set when the store could not be read; status is then a fallback
    error: Optional[Exception] = None

    @property
    def is_known(self) -> bool:
        return self.error is None


# ---------------------------------------------------------------------------
# Store access
# ---------------------------------------------------------------------------

def fetch_records_by_vehicle(vehicle_id: int) -> List[ServiceRecord]:
    return list(
        ServiceRecord.objects
        .filter(vehicle_id=vehicle_id)
        .order_by("-service_date", "-id")
    )


def fetch_vehicles_by_status(status: str, excluding: Optional[int] = None):
    qs = Vehicle.objects.filter(status=status)
    if excluding is not None:
        qs = qs.exclude(pk=excluding)
    return qs


def fetch_all_vehicle_ids() -> List[int]:
    return list(Vehicle.objects.order_by("pk").values_list("pk", flat=True))


def update_vehicle_status(
    vehicle_id: int,
    status: str,
    estimated_delivery_date: Optional[datetime] = None,
) -> None:
    # queryset.update() skips auto_now, so stamp updated_at explicitly
    Vehicle.objects.filter(pk=vehicle_id).update(
        status=status,
        estimated_delivery_date=estimated_delivery_date,
        updated_at=timezone.now(),
    )


# ---------------------------------------------------------------------------
# Derivation
# ---------------------------------------------------------------------------

def delivery_date(duration_minutes: Optional[int], now: Optional[datetime] = None) -> Optional[datetime]:
    """
    now + duration, or None when no positive duration is known.
    """
    if not duration_minutes or duration_minutes <= 0:
        return None
    now = now or timezone.now()
    return now + timedelta(minutes=duration_minutes)


def derive_status(
    records: Sequence[ServiceRecord],
    peer_in_progress: Union[bool, Callable[[], bool]],
    now: Optional[datetime] = None,
) -> StatusResult:
    """
    Vehicle status from its records. First matching rule wins:

      1) no records                      -> yok
      2) every record tamamlandi         -> tamamlandi
      3) any record devam                -> islemde (+ delivery estimate)
      4) any record tespit, peer working -> sirada
      5) otherwise                       -> yok

    `records` must be ordered newest service_date first; the first devam
    record in that order drives the delivery estimate. `peer_in_progress`
    may be a callable so the peer lookup only runs when rule 4 is reached.
    """
    if not records:
        return StatusResult(Vehicle.STATUS_NONE)

    statuses = [r.record_status for r in records]

    if all(s == ServiceRecord.STATUS_COMPLETED for s in statuses):
        return StatusResult(Vehicle.STATUS_COMPLETED)

    for r in records:
        if r.record_status == ServiceRecord.STATUS_IN_PROGRESS:
            return StatusResult(
                Vehicle.STATUS_IN_PROGRESS,
                delivery_date(r.estimated_duration_minutes, now),
            )

    if ServiceRecord.STATUS_DETECTED in statuses:
        busy = peer_in_progress() if callable(peer_in_progress) else peer_in_progress
        if busy:
            return StatusResult(Vehicle.STATUS_QUEUED)

    return StatusResult(Vehicle.STATUS_NONE)


def _has_record_status(records: Sequence[ServiceRecord], status: str) -> bool:
    return any(r.record_status == status for r in records)


# ---------------------------------------------------------------------------
# Calculator / propagator / bulk recalculation
# ---------------------------------------------------------------------------

def calculate_vehicle_status(vehicle_id: int, now: Optional[datetime] = None) -> StatusResult:
    """
    Read-only. A failed record or peer read falls back to yok but carries
    the error, so callers can tell it apart from a confirmed idle vehicle.
    """
    try:
        # savepoint keeps an enclosing transaction usable after a failed read
        with transaction.atomic():
            records = fetch_records_by_vehicle(vehicle_id)
    except DatabaseError as exc:
        logger.warning("Could not read service records for vehicle %s: %s", vehicle_id, exc)
        return StatusResult(Vehicle.STATUS_NONE, error=exc)

    def _peer_in_progress() -> bool:
        with transaction.atomic():
            return fetch_vehicles_by_status(Vehicle.STATUS_IN_PROGRESS, excluding=vehicle_id).exists()

    try:
        return derive_status(records, _peer_in_progress, now)
    except DatabaseError as exc:
        logger.warning("Could not check vehicles in progress for vehicle %s: %s", vehicle_id, exc)
        return StatusResult(Vehicle.STATUS_NONE, error=exc)


def update_vehicle_status_from_records(vehicle_id: int, now: Optional[datetime] = None) -> StatusResult:
    result = calculate_vehicle_status(vehicle_id, now)
    if not result.is_known:
        logger.warning("Leaving status of vehicle %s unchanged; records unavailable", vehicle_id)
        return result

    update_vehicle_status(vehicle_id, result.status, result.estimated_delivery_date)
    return result


def handle_record_status_change(
    vehicle_id: int,
    new_record_status: str,
    estimated_duration_minutes: Optional[int] = None,
    now: Optional[datetime] = None,
) -> List[int]:
    """
    Apply a record status transition to the owning vehicle.

    devam puts the vehicle in progress and queues every other idle vehicle
    that has a detected fault. tamamlandi recomputes the owning vehicle only.
    Anything else leaves vehicle statuses alone.

    Returns the ids of the other vehicles moved to sirada.
    """
    queued: List[int] = []

    if new_record_status == ServiceRecord.STATUS_IN_PROGRESS:
        with transaction.atomic():
            update_vehicle_status(
                vehicle_id,
                Vehicle.STATUS_IN_PROGRESS,
                delivery_date(estimated_duration_minutes, now),
            )

            candidates = fetch_vehicles_by_status(Vehicle.STATUS_NONE, excluding=vehicle_id)
            for other_id in candidates.values_list("pk", flat=True):
                records = fetch_records_by_vehicle(other_id)
                if _has_record_status(records, ServiceRecord.STATUS_DETECTED):
                    update_vehicle_status(other_id, Vehicle.STATUS_QUEUED)
                    queued.append(other_id)

        if queued:
            logger.info("Vehicle %s in progress; queued vehicles %s", vehicle_id, queued)

    elif new_record_status == ServiceRecord.STATUS_COMPLETED:
        with transaction.atomic():
            update_vehicle_status_from_records(vehicle_id, now)

    return queued


def recalculate_all_vehicle_statuses(now: Optional[datetime] = None) -> int:
    """
    Re-derive and write every vehicle's status. Repairs drift left by
    interrupted writes or manual edits.

    Returns the number of vehicles written.
    """
    with transaction.atomic():
        vehicle_ids = fetch_all_vehicle_ids()

        has_vehicle_in_progress = False
        for vehicle_id in vehicle_ids:
            if _has_record_status(fetch_records_by_vehicle(vehicle_id), ServiceRecord.STATUS_IN_PROGRESS):
                has_vehicle_in_progress = True
                break

        for vehicle_id in vehicle_ids:
            result = derive_status(fetch_records_by_vehicle(vehicle_id), has_vehicle_in_progress, now)
            update_vehicle_status(vehicle_id, result.status, result.estimated_delivery_date)

    logger.info(
        "Recalculated %d vehicle statuses (vehicle in progress: %s)",
        len(vehicle_ids), has_vehicle_in_progress,
    )
    return len(vehicle_ids)
