from decimal import Decimal

from rest_framework import serializers

from core.api import AmountField
from .models import ClientInvoice, ClientPayment


class PaymentSerializer(serializers.ModelSerializer):
    amountTHB = serializers.DecimalField(source="amount_thb", max_digits=14, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = ClientPayment
        fields = ["id", "date", "amountTHB", "method", "note", "createdAt"]


class InvoiceClientSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    feeType = serializers.CharField(source="fee_type")
    invoiceCurrency = serializers.CharField(source="invoice_currency")


class InvoiceSerializer(serializers.ModelSerializer):
    number = serializers.CharField(read_only=True)
    clientId = serializers.IntegerField(source="client_id", read_only=True)
    client = InvoiceClientSerializer(read_only=True)
    month = serializers.CharField(source="ym", read_only=True)
    periodStart = serializers.DateField(source="period_start", read_only=True)
    periodEnd = serializers.DateField(source="period_end", read_only=True)
    spendTHB = serializers.DecimalField(source="spend_thb", max_digits=14, decimal_places=2, read_only=True)
    manageFeeTHB = serializers.DecimalField(source="manage_fee_thb", max_digits=14, decimal_places=2, read_only=True)
    fixedFeeTHB = serializers.DecimalField(source="fixed_fee_thb", max_digits=14, decimal_places=2, read_only=True)
    totalTHB = serializers.DecimalField(source="total_thb", max_digits=14, decimal_places=2, read_only=True)
    paidTHB = AmountField(source="paid_thb")
    outstandingTHB = AmountField(source="outstanding_thb")
    payments = PaymentSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = ClientInvoice
        fields = [
            "id",
            "number",
            "clientId",
            "client",
            "month",
            "periodStart",
            "periodEnd",
            "spendTHB",
            "manageFeeTHB",
            "fixedFeeTHB",
            "totalTHB",
            "status",
            "paidTHB",
            "outstandingTHB",
            "payments",
            "createdAt",
        ]


class GenerateInvoiceSerializer(serializers.Serializer):
    month = serializers.RegexField(r"^\d{4}-(0[1-9]|1[0-2])$")
    clientId = serializers.CharField()


class RecordPaymentSerializer(serializers.Serializer):
    date = serializers.DateField()
    amountTHB = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0.01"))
    method = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=64)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
