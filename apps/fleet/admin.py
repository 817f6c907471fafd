from django.contrib import admin

from apps.maintenance.status import update_vehicle_status_from_records
from .models import QRMapping, Vehicle

@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ("plate_number", "brand", "model", "qr_code", "status", "estimated_delivery_date", "assigned_technician")
    list_filter = ("status",)
    search_fields = ("plate_number", "brand", "model", "owner_name", "chassis_number", "qr_code")
    readonly_fields = ("status", "estimated_delivery_date", "created_at", "updated_at")
    actions = ["recalculate_status"]

    @admin.action(description="Recalculate status from service records")
    def recalculate_status(self, request, queryset):
        skipped = 0
        for vehicle_id in queryset.values_list("pk", flat=True):
            if not update_vehicle_status_from_records(vehicle_id).is_known:
                skipped += 1
        self.message_user(request, f"Recalculated {queryset.count() - skipped} vehicle(s), skipped {skipped}.")

@admin.register(QRMapping)
class QRMappingAdmin(admin.ModelAdmin):
    list_display = ("slot_number", "qr_content", "created_at")
    search_fields = ("qr_content",)
