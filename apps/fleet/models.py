from django.db import models


class Vehicle(models.Model):
    # Service-queue position, derived from the vehicle's service records
    STATUS_IN_PROGRESS = "islemde"
    STATUS_QUEUED = "sirada"
    STATUS_COMPLETED = "tamamlandi"
    STATUS_NONE = "yok"
    STATUS_CHOICES = [
        (STATUS_IN_PROGRESS, "İşlemde"),
        (STATUS_QUEUED, "Sırada"),
        (STATUS_COMPLETED, "Tamamlandı"),
        (STATUS_NONE, "-"),
    ]

    plate_number = models.CharField(max_length=20)
    brand = models.CharField(max_length=80, blank=True)
    model = models.CharField(max_length=80, blank=True)
    year = models.PositiveIntegerField(null=True, blank=True)
    chassis_number = models.CharField(max_length=50, blank=True)
    color = models.CharField(max_length=40, blank=True)
    current_km = models.PositiveIntegerField(default=0)

    # Slot label printed on the QR sticker, usually the slot number
    qr_code = models.CharField(max_length=120, blank=True, db_index=True)

    owner_name = models.CharField(max_length=120, blank=True)
    owner_phone = models.CharField(max_length=40, blank=True)
    owner_address = models.TextField(blank=True)

    assigned_technician = models.CharField(max_length=120, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_NONE)
    estimated_delivery_date = models.DateTimeField(null=True, blank=True)

    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("-created_at",)
        indexes = [
            models.Index(fields=["status"], name="fleet_vehic_status_4f7c1a_idx"),
        ]

    def __str__(self):
        mm = f"{self.brand} {self.model}".strip()
        if mm:
            return f"{self.plate_number} ({mm})"
        return self.plate_number


class QRMapping(models.Model):
    """
    Raw sticker content -> slot number. Vehicles parked in a slot carry the
    slot number as their qr_code.
    """
    slot_number = models.PositiveIntegerField(unique=True)
    qr_content = models.CharField(max_length=255, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("slot_number",)

    def __str__(self) -> str:
        return f"Slot {self.slot_number}"
