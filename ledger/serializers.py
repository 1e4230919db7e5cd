from decimal import Decimal

from rest_framework import serializers

from core.money import CURRENCY_CHOICES, THB
from .models import Expense, Income


class ExpenseInputSerializer(serializers.Serializer):
    date = serializers.DateField()
    category = serializers.CharField(max_length=64)
    description = serializers.CharField(required=False, allow_blank=True, max_length=255)
    amountTHB = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0.01"))
    method = serializers.CharField(required=False, allow_blank=True, max_length=64)


class ExpenseSerializer(serializers.ModelSerializer):
    amountTHB = serializers.DecimalField(source="amount_thb", max_digits=14, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Expense
        fields = ["id", "date", "category", "description", "amountTHB", "method", "createdAt"]


class IncomeInputSerializer(serializers.Serializer):
    date = serializers.DateField()
    type = serializers.CharField(max_length=64)
    description = serializers.CharField(required=False, allow_blank=True, max_length=255)
    currency = serializers.ChoiceField(choices=CURRENCY_CHOICES, default=THB)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=Decimal("0.01"))
    exchangeRate = serializers.DecimalField(max_digits=12, decimal_places=4, required=False, allow_null=True)


class IncomeSerializer(serializers.ModelSerializer):
    exchangeRate = serializers.DecimalField(
        source="exchange_rate", max_digits=12, decimal_places=4, read_only=True, allow_null=True
    )
    amountTHB = serializers.DecimalField(source="amount_thb", max_digits=14, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Income
        fields = ["id", "date", "type", "description", "currency", "amount", "exchangeRate", "amountTHB", "createdAt"]
