from rest_framework import serializers
from rest_framework.views import APIView

from core.api import fail, ok, requested_month
from .services import aggregate_month


class MonthlySummarySerializer(serializers.Serializer):
    month = serializers.CharField(source="ym")
    incomeTHB = serializers.FloatField(source="income_thb")
    expenseTHB = serializers.FloatField(source="expense_thb")
    netTHB = serializers.FloatField(source="net_thb")
    adSpendTHB = serializers.FloatField(source="ad_spend_thb")
    invoiceTotalTHB = serializers.FloatField(source="invoice_total_thb")
    invoicePaidTHB = serializers.FloatField(source="invoice_paid_thb")
    outstandingTHB = serializers.FloatField(source="outstanding_thb")
    trainingPaidTHB = serializers.FloatField(source="training_paid_thb")


class MonthlyReport(APIView):
    def get(self, request):
        window = requested_month(request)
        if window is None:
            return fail("month must be YYYY-MM", fields={"month": ["Invalid month."]}, code="validation")
        summary = aggregate_month(request.user, window.ym)
        return ok(MonthlySummarySerializer(summary).data, month=window.ym)
