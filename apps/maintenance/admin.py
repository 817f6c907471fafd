from django.contrib import admin
from .models import ServiceRecord

@admin.register(ServiceRecord)
class ServiceRecordAdmin(admin.ModelAdmin):
    list_display = ("service_date", "vehicle", "title", "record_status", "technician", "estimated_duration_minutes", "completed_at")
    list_filter = ("record_status", "operation_type", "service_date")
    search_fields = ("title", "description", "technician", "vehicle__plate_number")
