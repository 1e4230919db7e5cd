from decimal import Decimal

from django import forms
from django.conf import settings
from django.utils import timezone

from .models import AdSource, AdSpend, Client


class ClientForm(forms.ModelForm):
    class Meta:
        model = Client
        fields = ["name", "fee_type", "fee_percent", "fixed_monthly_thb", "invoice_currency", "notes"]
        widgets = {"notes": forms.Textarea(attrs={"rows": 2})}


class AdSourceForm(forms.ModelForm):
    class Meta:
        model = AdSource
        fields = ["type", "name", "notes"]
        widgets = {"notes": forms.Textarea(attrs={"rows": 2})}


class AdSpendForm(forms.Form):
    date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    client = forms.ModelChoiceField(queryset=Client.objects.none())
    source = forms.ModelChoiceField(queryset=AdSource.objects.none(), required=False)
    platform = forms.ChoiceField(choices=AdSpend.PLATFORM_CHOICES, initial="FACEBOOK")
    spend_amount = forms.DecimalField(
        label="Spend (USD)", max_digits=14, decimal_places=2, min_value=Decimal("0.01")
    )
    rate_used = forms.DecimalField(
        label="Rate (USD→THB)", max_digits=10, decimal_places=4, min_value=Decimal("0.0001")
    )
    note = forms.CharField(max_length=255, required=False)

    def __init__(self, *args, owner=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["client"].queryset = Client.objects.filter(owner=owner)
        self.fields["source"].queryset = AdSource.objects.filter(client__owner=owner)
        self.fields["date"].initial = timezone.now().date()
        self.fields["rate_used"].initial = getattr(settings, "DEFAULT_USD_THB_RATE", "36.00")

    def clean(self):
        cleaned = super().clean()
        client = cleaned.get("client")
        source = cleaned.get("source")
        if client and source and source.client_id != client.id:
            self.add_error("source", "That source belongs to a different client.")
        return cleaned
