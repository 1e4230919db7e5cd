from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from core.money import CURRENCY_CHOICES, THB, convert_to_thb, to_decimal


class Expense(models.Model):
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="expenses")
    date = models.DateField()
    category = models.CharField(max_length=64)
    description = models.CharField(max_length=255, blank=True)
    amount_thb = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    method = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [models.Index(fields=["owner", "date"], name="expense_owner_date_idx")]

    def __str__(self):
        return f"{self.date} {self.category} {self.amount_thb}"


class Income(models.Model):
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="incomes")
    date = models.DateField()
    type = models.CharField(max_length=64)
    description = models.CharField(max_length=255, blank=True)
    currency = models.CharField(max_length=3, choices=CURRENCY_CHOICES, default=THB)
    amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    # Required for non-THB entries; amount_thb is fixed at entry time.
    exchange_rate = models.DecimalField(max_digits=12, decimal_places=4, null=True, blank=True)
    amount_thb = models.DecimalField(max_digits=14, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [models.Index(fields=["owner", "date"], name="income_owner_date_idx")]

    def __str__(self):
        return f"{self.date} {self.type} {self.amount} {self.currency}"

    def save(self, *args, **kwargs):
        if self.amount_thb is None:
            self.amount_thb = to_decimal(convert_to_thb(self.amount, self.currency, self.exchange_rate))
        super().save(*args, **kwargs)
