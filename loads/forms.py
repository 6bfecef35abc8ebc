# forms.py
from django import forms

from .models import Load, User


class LoadForm(forms.ModelForm):
    """
    Form for creating Load records from office staff input.

    Status is not editable here; new loads always start as CREATED and
    move on through LoadStatusService.
    """

    class Meta:
        model = Load
        fields = [
            "number",
            "driver",
            "destination_name",
            # geofence centers
            "shipper_latitude",
            "shipper_longitude",
            "receiver_latitude",
            "receiver_longitude",
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["driver"].queryset = User.objects.filter(
            role=User.Role.DRIVER, is_active=True
        )


class LocationUpdateForm(forms.Form):
    """
    Driver GPS ping.

    Presence only: coordinates are not range-checked.
    """

    latitude = forms.FloatField()
    longitude = forms.FloatField()
    accuracy = forms.FloatField(required=False)


class StatusUpdateForm(forms.Form):
    # Plain CharField: unknown statuses are rejected by LoadStatusService
    status = forms.CharField(max_length=30)
    timestamp = forms.DateTimeField(required=False)


class PaymentForm(forms.Form):
    payment_method = forms.ChoiceField(choices=Load.PaymentMethod.choices)
    payment_reference = forms.CharField(max_length=100, required=False)
    payment_notes = forms.CharField(required=False)
