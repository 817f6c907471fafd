from django import forms
from .models import Vehicle

class VehicleForm(forms.ModelForm):
    class Meta:
        model = Vehicle
        fields = [
            "plate_number", "brand", "model", "year",
            "chassis_number", "color", "current_km", "qr_code",
            "owner_name", "owner_phone", "owner_address",
            "assigned_technician", "notes",
        ]
        widgets = {
            "owner_address": forms.Textarea(attrs={"rows": 2}),
            "notes": forms.Textarea(attrs={"rows": 4}),
        }

    def clean_plate_number(self):
        # Plates are stored upper-case without inner spaces: "34 ABC 123" -> "34ABC123"
        value = (self.cleaned_data.get("plate_number") or "").strip()
        return "".join(value.split()).upper()
