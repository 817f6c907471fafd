import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("fleet", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ServiceRecord",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True)),
                (
                    "operation_type",
                    models.CharField(
                        blank=True,
                        choices=[("tamir", "Tamir"), ("bakim", "Bakım"), ("degisim", "Değişim")],
                        max_length=20,
                    ),
                ),
                ("service_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("km_at_service", models.PositiveIntegerField(default=0)),
                (
                    "record_status",
                    models.CharField(
                        choices=[("tespit", "Tespit"), ("devam", "Devam Ediyor"), ("tamamlandi", "Tamamlandı")],
                        default="tespit",
                        max_length=20,
                    ),
                ),
                ("estimated_duration_minutes", models.PositiveIntegerField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("technician", models.CharField(blank=True, max_length=120)),
                ("labor_cost", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("part_cost", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="created_service_records",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "vehicle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="service_records",
                        to="fleet.vehicle",
                    ),
                ),
            ],
            options={
                "ordering": ["-service_date", "-id"],
                "indexes": [
                    models.Index(fields=["vehicle", "service_date"], name="maintenance_vehicle_8d2e0b_idx"),
                    models.Index(fields=["record_status"], name="maintenance_record__c31a9f_idx"),
                ],
            },
        ),
    ]
