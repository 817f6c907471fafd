import csv
import io
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth.decorators import login_required
from django.db.models import Count, Q, Sum
from django.db.models.functions import Coalesce
from django.http import HttpResponse
from django.shortcuts import render
from django.utils import timezone

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment
from openpyxl.utils import get_column_letter

from apps.fleet.models import Vehicle
from apps.maintenance.models import ServiceRecord


def _fmt_dt(value) -> str:
    if not value:
        return ""
    return timezone.localtime(value).strftime("%Y-%m-%d %H:%M")


def _xlsx_response(wb: Workbook, filename: str) -> HttpResponse:
    bio = io.BytesIO()
    wb.save(bio)
    bio.seek(0)

    resp = HttpResponse(
        bio.getvalue(),
        content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
    resp["Content-Disposition"] = f'attachment; filename="{filename}"'
    return resp


def _autosize_columns(ws):
    for col in range(1, ws.max_column + 1):
        max_len = 0
        for row in range(1, ws.max_row + 1):
            v = ws.cell(row=row, column=col).value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[get_column_letter(col)].width = min(max(12, max_len + 2), 55)


def _write_sheet(ws, title: str, headers: list[str], rows: list[list]):
    ws.title = title
    ws.append(headers)

    header_font = Font(bold=True)
    for i in range(1, len(headers) + 1):
        c = ws.cell(row=1, column=i)
        c.font = header_font
        c.alignment = Alignment(vertical="center")

    for r in rows:
        ws.append(r)

    _autosize_columns(ws)


def _vehicles_with_open_counts():
    return (
        Vehicle.objects
        .annotate(
            open_records=Count(
                "service_records",
                filter=Q(service_records__record_status__in=ServiceRecord.OPEN_STATUSES),
            ),
        )
        .order_by("plate_number")
    )


def _build_board_context():
    today = timezone.localdate()
    by_status = dict(
        Vehicle.objects
        .values_list("status")
        .annotate(n=Count("id"))
        .order_by()
    )

    # Cost of work completed in the last 30 days
    completed_30 = ServiceRecord.objects.filter(
        record_status=ServiceRecord.STATUS_COMPLETED,
        completed_at__date__gte=today - timedelta(days=30),
    )
    totals = completed_30.aggregate(
        labor=Coalesce(Sum("labor_cost"), Decimal("0.00")),
        parts=Coalesce(Sum("part_cost"), Decimal("0.00")),
    )

    return {
        "today": today,
        "status_counts": [
            {"value": value, "label": label, "count": by_status.get(value, 0)}
            for value, label in Vehicle.STATUS_CHOICES
        ],
        "vehicle_count": sum(by_status.values()),
        "vehicles": _vehicles_with_open_counts(),
        "completed_30_count": completed_30.count(),
        "labor_30": totals["labor"],
        "parts_30": totals["parts"],
    }


@login_required
def index(request):
    return render(request, "reports/index.html", _build_board_context())


# ---------------- EXPORTS ----------------

@login_required
def export_records_csv(request):
    qs = ServiceRecord.objects.select_related("vehicle").order_by("-service_date", "-id")

    resp = HttpResponse(content_type="text/csv")
    resp["Content-Disposition"] = 'attachment; filename="service_records.csv"'
    w = csv.writer(resp)
    w.writerow(["service_date", "vehicle", "title", "record_status", "technician", "estimated_duration_minutes", "labor_cost", "part_cost", "completed_at"])

    for r in qs:
        w.writerow([
            _fmt_dt(r.service_date),
            str(r.vehicle),
            r.title,
            r.record_status,
            r.technician,
            r.estimated_duration_minutes or "",
            r.labor_cost if r.labor_cost is not None else "",
            r.part_cost if r.part_cost is not None else "",
            _fmt_dt(r.completed_at),
        ])
    return resp


@login_required
def export_status_xlsx(request):
    wb = Workbook()
    ws = wb.active
    rows = []
    for v in _vehicles_with_open_counts():
        rows.append([
            v.plate_number,
            f"{v.brand} {v.model}".strip(),
            v.qr_code,
            v.get_status_display(),
            _fmt_dt(v.estimated_delivery_date),
            v.assigned_technician,
            v.open_records,
        ])

    _write_sheet(ws, "Vehicle Status", ["Plate", "Vehicle", "Slot", "Status", "Estimated Delivery", "Technician", "Open Records"], rows)
    return _xlsx_response(wb, "vehicle_status.xlsx")


@login_required
def export_records_xlsx(request):
    qs = ServiceRecord.objects.select_related("vehicle").order_by("-service_date", "-id")

    wb = Workbook()
    ws = wb.active
    rows = []
    for r in qs:
        rows.append([
            _fmt_dt(r.service_date),
            r.vehicle.plate_number,
            r.title,
            r.get_record_status_display(),
            r.technician,
            r.estimated_duration_minutes or "",
            float(r.total_cost),
            _fmt_dt(r.completed_at),
        ])

    _write_sheet(ws, "Service Records", ["Service Date", "Plate", "Title", "Status", "Technician", "Est. Minutes", "Total Cost", "Completed At"], rows)
    return _xlsx_response(wb, "service_records.xlsx")
