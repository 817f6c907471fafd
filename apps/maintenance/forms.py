from django import forms
from .models import ServiceRecord

class ServiceRecordForm(forms.ModelForm):
    class Meta:
        model = ServiceRecord
        fields = [
            "vehicle",
            "title",
            "operation_type",
            "service_date",
            "km_at_service",
            "record_status",
            "estimated_duration_minutes",
            "technician",
            "labor_cost",
            "part_cost",
            "description",
        ]
        widgets = {
            "service_date": forms.DateTimeInput(attrs={"type": "datetime-local"}, format="%Y-%m-%dT%H:%M"),
            "description": forms.Textarea(attrs={"rows": 4}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["vehicle"].queryset = (
            self.fields["vehicle"].queryset.order_by("plate_number")
        )
        # A record never moves to another vehicle once created
        if self.instance.pk:
            del self.fields["vehicle"]

    def clean_estimated_duration_minutes(self):
        value = self.cleaned_data.get("estimated_duration_minutes")
        if value is not None and value <= 0:
            raise forms.ValidationError("Duration must be a positive number of minutes.")
        return value

    def clean_km_at_service(self):
        value = self.cleaned_data.get("km_at_service")
        if not value:
            raise forms.ValidationError("Enter the odometer reading for this service.")
        return value
