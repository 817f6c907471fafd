from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="QRMapping",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("slot_number", models.PositiveIntegerField(unique=True)),
                ("qr_content", models.CharField(max_length=255, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ("slot_number",),
            },
        ),
        migrations.CreateModel(
            name="Vehicle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("plate_number", models.CharField(max_length=20)),
                ("brand", models.CharField(blank=True, max_length=80)),
                ("model", models.CharField(blank=True, max_length=80)),
                ("year", models.PositiveIntegerField(blank=True, null=True)),
                ("chassis_number", models.CharField(blank=True, max_length=50)),
                ("color", models.CharField(blank=True, max_length=40)),
                ("current_km", models.PositiveIntegerField(default=0)),
                ("qr_code", models.CharField(blank=True, db_index=True, max_length=120)),
                ("owner_name", models.CharField(blank=True, max_length=120)),
                ("owner_phone", models.CharField(blank=True, max_length=40)),
                ("owner_address", models.TextField(blank=True)),
                ("assigned_technician", models.CharField(blank=True, max_length=120)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("islemde", "İşlemde"),
                            ("sirada", "Sırada"),
                            ("tamamlandi", "Tamamlandı"),
                            ("yok", "-"),
                        ],
                        default="yok",
                        max_length=20,
                    ),
                ),
                ("estimated_delivery_date", models.DateTimeField(blank=True, null=True)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ("-created_at",),
                "indexes": [models.Index(fields=["status"], name="fleet_vehic_status_4f7c1a_idx")],
            },
        ),
    ]
