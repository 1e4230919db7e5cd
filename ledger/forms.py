from django import forms
from django.utils import timezone

from .models import Expense, Income


class ExpenseForm(forms.ModelForm):
    class Meta:
        model = Expense
        fields = ["date", "category", "description", "amount_thb", "method"]
        widgets = {"date": forms.DateInput(attrs={"type": "date"})}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["date"].initial = timezone.now().date()


class IncomeForm(forms.ModelForm):
    class Meta:
        model = Income
        fields = ["date", "type", "description", "currency", "amount", "exchange_rate"]
        widgets = {"date": forms.DateInput(attrs={"type": "date"})}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["date"].initial = timezone.now().date()

    def clean(self):
        cleaned = super().clean()
        currency = cleaned.get("currency")
        rate = cleaned.get("exchange_rate")
        if currency and currency != "THB" and not (rate and rate > 0):
            self.add_error("exchange_rate", f"Exchange rate required for {currency}.")
        return cleaned
