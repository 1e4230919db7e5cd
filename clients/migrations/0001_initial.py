import decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Client",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                (
                    "fee_type",
                    models.CharField(
                        choices=[
                            ("PERCENT_OF_SPEND", "Percent of spend"),
                            ("FIXED_MONTHLY", "Fixed monthly"),
                            ("HYBRID", "Hybrid"),
                        ],
                        default="PERCENT_OF_SPEND",
                        max_length=32,
                    ),
                ),
                (
                    "fee_percent",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(100),
                        ],
                    ),
                ),
                (
                    "fixed_monthly_thb",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(0)],
                    ),
                ),
                (
                    "invoice_currency",
                    models.CharField(
                        choices=[("THB", "THB"), ("USD", "USD"), ("MMK", "MMK")], default="THB", max_length=3
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="clients",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("fee_percent__gte", 0), ("fee_percent__lte", 100)),
                        name="client_fee_percent_range",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("fixed_monthly_thb__gte", 0)),
                        name="client_fixed_monthly_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AdSource",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("type", models.CharField(max_length=64)),
                ("name", models.CharField(max_length=200)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sources",
                        to="clients.client",
                    ),
                ),
            ],
            options={
                "ordering": ["name", "id"],
            },
        ),
        migrations.CreateModel(
            name="AdSpend",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                (
                    "platform",
                    models.CharField(
                        choices=[
                            ("FACEBOOK", "Facebook"),
                            ("GOOGLE", "Google"),
                            ("TIKTOK", "TikTok"),
                            ("VIBER", "Viber"),
                            ("CONSULTING", "Consulting"),
                            ("OTHER", "Other"),
                        ],
                        default="FACEBOOK",
                        max_length=16,
                    ),
                ),
                ("spend_currency", models.CharField(default="USD", editable=False, max_length=3)),
                (
                    "spend_amount",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=14,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.01"))],
                    ),
                ),
                ("billing_currency", models.CharField(default="THB", editable=False, max_length=3)),
                (
                    "rate_used",
                    models.DecimalField(
                        decimal_places=4,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(decimal.Decimal("0.0001"))],
                    ),
                ),
                ("billed_amount", models.DecimalField(decimal_places=2, editable=False, max_digits=14)),
                ("note", models.CharField(blank=True, max_length=255)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ad_spends",
                        to="clients.client",
                    ),
                ),
                (
                    "owner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="ad_spends",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "source",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="ad_spends",
                        to="clients.adsource",
                    ),
                ),
            ],
            options={
                "ordering": ["-date", "-id"],
                "indexes": [models.Index(fields=["client", "date"], name="adspend_client_date_idx")],
            },
        ),
    ]
