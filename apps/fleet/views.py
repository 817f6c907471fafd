from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.shortcuts import render, redirect, get_object_or_404
from django.db.models import Count, Q
from django.contrib import messages

from apps.maintenance.models import ServiceRecord
from apps.maintenance.status import recalculate_all_vehicle_statuses, update_vehicle_status_from_records

from .models import Vehicle
from .forms import VehicleForm
from .qr import resolve_scanned_code


@login_required
def vehicle_list(request):
    if getattr(settings, "FLEET_RECALCULATE_ON_LIST", True):
        recalculate_all_vehicle_statuses()

    q = (request.GET.get("q") or "").strip()
    status = (request.GET.get("status") or "").strip()

    qs = Vehicle.objects.annotate(
        open_records=Count(
            "service_records",
            filter=Q(service_records__record_status__in=ServiceRecord.OPEN_STATUSES),
        ),
    )
    if status:
        qs = qs.filter(status=status)
    if q:
        qs = qs.filter(
            Q(plate_number__icontains=q) |
            Q(brand__icontains=q) |
            Q(model__icontains=q) |
            Q(owner_name__icontains=q) |
            Q(qr_code__iexact=q)
        )

    return render(request, "fleet/vehicle_list.html", {
        "vehicles": qs,
        "q": q,
        "status": status,
        "status_choices": Vehicle.STATUS_CHOICES,
    })

@login_required
def vehicle_create(request):
    if request.method == "POST":
        form = VehicleForm(request.POST)
        if form.is_valid():
            v = form.save()
            messages.success(request, "Vehicle created.")
            return redirect("fleet:vehicle_detail", pk=v.pk)
    else:
        form = VehicleForm()

    return render(request, "fleet/vehicle_form.html", {
        "form": form,
        "mode": "create",
    })

@login_required
def vehicle_detail(request, pk: int):
    v = get_object_or_404(Vehicle, pk=pk)

    result = update_vehicle_status_from_records(v.pk)
    if not result.is_known:
        messages.warning(request, "Vehicle status could not be refreshed; showing the last known value.")
    v.refresh_from_db()

    return render(request, "fleet/vehicle_detail.html", {
        "vehicle": v,
        "records": v.service_records.order_by("-service_date", "-id"),
    })

@login_required
def vehicle_update(request, pk: int):
    v = get_object_or_404(Vehicle, pk=pk)

    if request.method == "POST":
        form = VehicleForm(request.POST, instance=v)
        if form.is_valid():
            form.save()
            messages.success(request, "Vehicle updated.")
            return redirect("fleet:vehicle_detail", pk=v.pk)
    else:
        form = VehicleForm(instance=v)

    return render(request, "fleet/vehicle_form.html", {
        "form": form,
        "mode": "edit",
        "vehicle": v,
    })

@login_required
def vehicle_delete(request, pk: int):
    v = get_object_or_404(Vehicle, pk=pk)

    if request.method == "POST":
        v.delete()
        messages.success(request, "Vehicle deleted.")
        return redirect("fleet:vehicle_list")

    return render(request, "fleet/vehicle_delete.html", {
        "vehicle": v,
    })

@login_required
def vehicle_scan(request):
    code = (request.GET.get("code") or "").strip()
    if not code:
        messages.error(request, "No QR code received.")
        return redirect("fleet:vehicle_list")

    v = resolve_scanned_code(code)
    if v is None:
        messages.error(request, "No vehicle matches this QR code.")
        return redirect("fleet:vehicle_list")

    return redirect("fleet:vehicle_detail", pk=v.pk)
