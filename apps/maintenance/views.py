from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import HttpResponseBadRequest
from django.shortcuts import get_object_or_404, redirect, render
from django.db.models import Q
from django.views.decorators.http import require_POST

from apps.fleet.models import Vehicle
from .models import ServiceRecord
from .forms import ServiceRecordForm
from . import services

@login_required
def record_list(request):
    qs = (
        ServiceRecord.objects
        .select_related("vehicle")
        .order_by("-service_date", "-id")
    )

    q = (request.GET.get("q") or "").strip()
    vehicle_id = (request.GET.get("vehicle") or "").strip()
    record_status = (request.GET.get("status") or "").strip()

    if vehicle_id:
        qs = qs.filter(vehicle_id=vehicle_id)

    if record_status:
        qs = qs.filter(record_status=record_status)

    if q:
        qs = qs.filter(
            Q(title__icontains=q) |
            Q(description__icontains=q) |
            Q(technician__icontains=q) |
            Q(vehicle__plate_number__icontains=q)
        )

    return render(
        request,
        "maintenance/list.html",
        {
            "records": qs,
            "q": q,
            "vehicle_id": vehicle_id,
            "status": record_status,
            "vehicles": Vehicle.objects.order_by("plate_number"),
            "status_choices": ServiceRecord.STATUS_CHOICES,
        },
    )


@login_required
def record_detail(request, pk: int):
    obj = get_object_or_404(ServiceRecord.objects.select_related("vehicle"), pk=pk)
    return render(request, "maintenance/detail.html", {"obj": obj})


@login_required
def record_create(request):
    if request.method == "POST":
        form = ServiceRecordForm(request.POST)
        if form.is_valid():
            obj = services.create_record(form.save(commit=False), user=request.user)
            messages.success(request, "Service record added.")
            return redirect("fleet:vehicle_detail", pk=obj.vehicle_id)
    else:
        initial = {}
        vehicle_id = (request.GET.get("vehicle") or "").strip()
        if vehicle_id.isdigit():
            vehicle = Vehicle.objects.filter(pk=vehicle_id).first()
            if vehicle:
                initial = {"vehicle": vehicle, "km_at_service": vehicle.current_km}
        form = ServiceRecordForm(initial=initial)

    return render(request, "maintenance/form.html", {"form": form, "mode": "create"})


@login_required
def record_update(request, pk: int):
    obj = get_object_or_404(ServiceRecord, pk=pk)

    if request.method == "POST":
        form = ServiceRecordForm(request.POST, instance=obj)
        if form.is_valid():
            services.update_record(form.save(commit=False))
            messages.success(request, "Service record updated.")
            return redirect("maintenance:record_detail", pk=obj.pk)
    else:
        form = ServiceRecordForm(instance=obj)

    return render(request, "maintenance/form.html", {"form": form, "mode": "edit", "obj": obj})


@login_required
def record_delete(request, pk: int):
    obj = get_object_or_404(ServiceRecord, pk=pk)

    if request.method == "POST":
        vehicle_id = obj.vehicle_id
        services.delete_record(obj)
        messages.success(request, "Service record deleted.")
        return redirect("fleet:vehicle_detail", pk=vehicle_id)

    return render(request, "maintenance/form.html", {"mode": "delete", "obj": obj})


@login_required
@require_POST
def record_set_status(request, pk: int, new_status: str):
    obj = get_object_or_404(ServiceRecord, pk=pk)

    try:
        services.set_record_status(obj, new_status)
    except ValueError as exc:
        return HttpResponseBadRequest(str(exc))

    messages.success(request, f'Status set to "{obj.get_record_status_display()}".')
    return redirect("maintenance:record_detail", pk=obj.pk)
