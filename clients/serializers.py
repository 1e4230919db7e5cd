from decimal import Decimal

from rest_framework import serializers

from core.money import CURRENCY_CHOICES, THB
from .models import AdSource, AdSpend, Client


class ClientSerializer(serializers.ModelSerializer):
    feeType = serializers.ChoiceField(
        source="fee_type", choices=Client.FEE_TYPE_CHOICES, default=Client.PERCENT_OF_SPEND
    )
    feePercent = serializers.DecimalField(
        source="fee_percent",
        max_digits=5,
        decimal_places=2,
        min_value=Decimal("0"),
        max_value=Decimal("100"),
        default=Decimal("0"),
    )
    fixedMonthlyTHB = serializers.DecimalField(
        source="fixed_monthly_thb",
        max_digits=14,
        decimal_places=2,
        min_value=Decimal("0"),
        default=Decimal("0"),
    )
    invoiceCurrency = serializers.ChoiceField(
        source="invoice_currency", choices=CURRENCY_CHOICES, default=THB
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Client
        fields = ["id", "name", "feeType", "feePercent", "fixedMonthlyTHB", "invoiceCurrency", "notes", "createdAt"]


class AdSourceSerializer(serializers.ModelSerializer):
    clientId = serializers.CharField(write_only=True)

    class Meta:
        model = AdSource
        fields = ["id", "clientId", "type", "name", "notes"]


class AdSpendInputSerializer(serializers.Serializer):
    date = serializers.DateField()
    platform = serializers.ChoiceField(choices=AdSpend.PLATFORM_CHOICES, default="FACEBOOK")
    clientId = serializers.CharField()
    sourceId = serializers.CharField(required=False, allow_blank=True)
    spendAmount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0.01"))
    rateUsed = serializers.DecimalField(max_digits=10, decimal_places=4, min_value=Decimal("0.0001"))
    note = serializers.CharField(required=False, allow_blank=True, max_length=255)


class AdSpendSerializer(serializers.ModelSerializer):
    clientId = serializers.IntegerField(source="client_id", read_only=True)
    client = serializers.CharField(source="client.name", read_only=True)
    sourceId = serializers.IntegerField(source="source_id", read_only=True)
    source = serializers.CharField(source="source.name", read_only=True, default=None)
    spendCurrency = serializers.CharField(source="spend_currency", read_only=True)
    spendAmount = serializers.DecimalField(source="spend_amount", max_digits=14, decimal_places=2, read_only=True)
    rateUsed = serializers.DecimalField(source="rate_used", max_digits=10, decimal_places=4, read_only=True)
    billingCurrency = serializers.CharField(source="billing_currency", read_only=True)
    billedAmount = serializers.DecimalField(source="billed_amount", max_digits=14, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = AdSpend
        fields = [
            "id",
            "date",
            "platform",
            "clientId",
            "client",
            "sourceId",
            "source",
            "spendCurrency",
            "spendAmount",
            "rateUsed",
            "billingCurrency",
            "billedAmount",
            "note",
            "createdAt",
        ]
