from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Sum

from clients.models import Client
from core.money import to_number


class ClientInvoice(models.Model):
    UNPAID = "UNPAID"
    PARTIAL = "PARTIAL"
    PAID = "PAID"
    STATUS_CHOICES = [(UNPAID, "Unpaid"), (PARTIAL, "Partially paid"), (PAID, "Paid")]

    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="invoices")
    # [period_start, period_end): first day of the month, first day of the next.
    period_start = models.DateField()
    period_end = models.DateField()
    spend_thb = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    manage_fee_thb = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    fixed_fee_thb = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    total_thb = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=UNPAID)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.UniqueConstraint(fields=["client", "period_start"], name="unique_invoice_per_client_period"),
        ]

    def __str__(self):
        return f"{self.client} {self.period_start:%Y-%m}"

    @property
    def ym(self):
        return f"{self.period_start:%Y-%m}"

    @property
    def number(self):
        return f"INV-{self.period_start:%Y%m}-{self.pk:05d}"

    def paid_thb(self) -> float:
        # Uses the prefetched payments when present.
        if "payments" in getattr(self, "_prefetched_objects_cache", {}):
            return sum(to_number(p.amount_thb) for p in self.payments.all())
        return to_number(self.payments.aggregate(total=Sum("amount_thb"))["total"])

    def outstanding_thb(self) -> float:
        return max(to_number(self.total_thb) - self.paid_thb(), 0.0)


class ClientPayment(models.Model):
    """Append-only: payments are never edited, only added."""

    invoice = models.ForeignKey(ClientInvoice, on_delete=models.CASCADE, related_name="payments")
    date = models.DateField()
    amount_thb = models.DecimalField(
        max_digits=14, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    method = models.CharField(max_length=64, blank=True, null=True)
    note = models.CharField(max_length=255, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["date", "id"]
        constraints = [
            models.CheckConstraint(condition=models.Q(amount_thb__gt=0), name="client_payment_positive"),
        ]
