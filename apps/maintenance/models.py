from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone


class ServiceRecord(models.Model):
    # Job lifecycle, moved forward by the technician's status buttons
    STATUS_DETECTED = "tespit"
    STATUS_IN_PROGRESS = "devam"
    STATUS_COMPLETED = "tamamlandi"
    STATUS_CHOICES = [
        (STATUS_DETECTED, "Tespit"),
        (STATUS_IN_PROGRESS, "Devam Ediyor"),
        (STATUS_COMPLETED, "Tamamlandı"),
    ]
    OPEN_STATUSES = (STATUS_DETECTED, STATUS_IN_PROGRESS)

    OPERATION_REPAIR = "tamir"
    OPERATION_MAINTENANCE = "bakim"
    OPERATION_REPLACE = "degisim"
    OPERATION_CHOICES = [
        (OPERATION_REPAIR, "Tamir"),
        (OPERATION_MAINTENANCE, "Bakım"),
        (OPERATION_REPLACE, "Değişim"),
    ]

    vehicle = models.ForeignKey(
        "fleet.Vehicle",
        on_delete=models.CASCADE,
        related_name="service_records",
    )

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    operation_type = models.CharField(max_length=20, choices=OPERATION_CHOICES, blank=True)

    service_date = models.DateTimeField(default=timezone.now)
    km_at_service = models.PositiveIntegerField(default=0)

    record_status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_DETECTED)
    estimated_duration_minutes = models.PositiveIntegerField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    technician = models.CharField(max_length=120, blank=True)
    labor_cost = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    part_cost = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_service_records",
    )

    class Meta:
        ordering = ["-service_date", "-id"]
        indexes = [
            models.Index(fields=["vehicle", "service_date"], name="maintenance_vehicle_8d2e0b_idx"),
            models.Index(fields=["record_status"], name="maintenance_record__c31a9f_idx"),
        ]

    @property
    def total_cost(self) -> Decimal:
        return (self.labor_cost or Decimal("0.00")) + (self.part_cost or Decimal("0.00"))

    @property
    def is_open(self) -> bool:
        return self.record_status != self.STATUS_COMPLETED

    def __str__(self) -> str:
        return f"{self.vehicle} - {self.title} ({self.get_record_status_display()})"
