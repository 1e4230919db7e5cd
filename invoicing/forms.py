from decimal import Decimal

from django import forms
from django.utils import timezone

from clients.models import Client


class GenerateInvoiceForm(forms.Form):
    client = forms.ModelChoiceField(queryset=Client.objects.none())

    def __init__(self, *args, owner=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["client"].queryset = Client.objects.filter(owner=owner).order_by("name")


class PaymentForm(forms.Form):
    METHOD_CHOICES = [
        ("", "-"),
        ("BANK_TRANSFER", "Bank transfer"),
        ("CASH", "Cash"),
        ("PROMPTPAY", "PromptPay"),
        ("CARD", "Card"),
        ("OTHER", "Other"),
    ]

    date = forms.DateField(widget=forms.DateInput(attrs={"type": "date"}))
    amount_thb = forms.DecimalField(
        label="Amount (THB)", max_digits=14, decimal_places=2, min_value=Decimal("0.01")
    )
    method = forms.ChoiceField(choices=METHOD_CHOICES, required=False)
    note = forms.CharField(max_length=255, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["date"].initial = timezone.now().date()
