from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from core.money import CURRENCY_CHOICES, THB, billed_amount, to_decimal


class Client(models.Model):
    PERCENT_OF_SPEND = "PERCENT_OF_SPEND"
    FIXED_MONTHLY = "FIXED_MONTHLY"
    HYBRID = "HYBRID"
    FEE_TYPE_CHOICES = [
        (PERCENT_OF_SPEND, "Percent of spend"),
        (FIXED_MONTHLY, "Fixed monthly"),
        (HYBRID, "Hybrid"),
    ]

    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="clients")
    name = models.CharField(max_length=200)
    fee_type = models.CharField(max_length=32, choices=FEE_TYPE_CHOICES, default=PERCENT_OF_SPEND)
    fee_percent = models.DecimalField(
        max_digits=5,
        decimal_places=2,
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    fixed_monthly_thb = models.DecimalField(
        max_digits=14, decimal_places=2, default=0, validators=[MinValueValidator(0)]
    )
    invoice_currency = models.CharField(max_length=3, choices=CURRENCY_CHOICES, default=THB)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(fee_percent__gte=0) & models.Q(fee_percent__lte=100),
                name="client_fee_percent_range",
            ),
            models.CheckConstraint(
                condition=models.Q(fixed_monthly_thb__gte=0),
                name="client_fixed_monthly_non_negative",
            ),
        ]

    def __str__(self):
        return self.name


class AdSource(models.Model):
    """A page, ad account or channel a client's spend is booked against."""

    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="sources")
    type = models.CharField(max_length=64)
    name = models.CharField(max_length=200)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self):
        return f"{self.name} ({self.type})"


class AdSpend(models.Model):
    PLATFORM_CHOICES = [
        ("FACEBOOK", "Facebook"),
        ("GOOGLE", "Google"),
        ("TIKTOK", "TikTok"),
        ("VIBER", "Viber"),
        ("CONSULTING", "Consulting"),
        ("OTHER", "Other"),
    ]

    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="ad_spends")
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="ad_spends")
    source = models.ForeignKey(
        AdSource, null=True, blank=True, on_delete=models.SET_NULL, related_name="ad_spends"
    )
    date = models.DateField()
    platform = models.CharField(max_length=16, choices=PLATFORM_CHOICES, default="FACEBOOK")
    spend_currency = models.CharField(max_length=3, default="USD", editable=False)
    spend_amount = models.DecimalField(max_digits=14, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))])
    billing_currency = models.CharField(max_length=3, default=THB, editable=False)
    rate_used = models.DecimalField(max_digits=10, decimal_places=4, validators=[MinValueValidator(Decimal("0.0001"))])
    # Fixed at creation: later rate changes never touch booked spend.
    billed_amount = models.DecimalField(max_digits=14, decimal_places=2, editable=False)
    note = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date", "-id"]
        indexes = [models.Index(fields=["client", "date"], name="adspend_client_date_idx")]

    def save(self, *args, **kwargs):
        if self.billed_amount is None:
            self.billed_amount = to_decimal(billed_amount(self.spend_amount, self.rate_used))
        super().save(*args, **kwargs)
