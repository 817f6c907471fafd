from django.urls import path
from . import views

app_name = "reports"

urlpatterns = [
    # Status board (current snapshot)
    path("", views.index, name="index"),

    path("export/records.csv", views.export_records_csv, name="export_records_csv"),
    path("export/status.xlsx", views.export_status_xlsx, name="export_status_xlsx"),
    path("export/records.xlsx", views.export_records_xlsx, name="export_records_xlsx"),
]
