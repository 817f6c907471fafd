from django.contrib.auth.decorators import login_required
from django.db.models import Count
from django.shortcuts import redirect, render

from apps.fleet.models import Vehicle
from apps.maintenance.models import ServiceRecord

def home(request):
    return redirect("core:dashboard")

@login_required
def dashboard(request):
    by_status = dict(
        Vehicle.objects
        .values_list("status")
        .annotate(n=Count("id"))
        .order_by()
    )

    status_counts = [
        {"value": value, "label": label, "count": by_status.get(value, 0)}
        for value, label in Vehicle.STATUS_CHOICES
    ]

    open_records = (
        ServiceRecord.objects
        .filter(record_status__in=ServiceRecord.OPEN_STATUSES)
        .count()
    )

    in_progress = (
        Vehicle.objects
        .filter(status=Vehicle.STATUS_IN_PROGRESS)
        .order_by("estimated_delivery_date")
    )

    return render(
        request,
        "core/dashboard.html",
        {
            "status_counts": status_counts,
            "open_records": open_records,
            "in_progress": in_progress,
        },
    )
