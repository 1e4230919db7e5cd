from rest_framework import status
from rest_framework.views import APIView

from core.api import fail, invalid, ok, requested_month, result_response
from .serializers import ExpenseInputSerializer, ExpenseSerializer, IncomeInputSerializer, IncomeSerializer
from .services import create_expense, create_income, expenses_for_month, income_for_month


def _bad_month():
    return fail("month must be YYYY-MM", fields={"month": ["Invalid month."]}, code="validation")


class ExpenseListCreate(APIView):
    def get(self, request):
        window = requested_month(request)
        if window is None:
            return _bad_month()
        rows = expenses_for_month(request.user, window)
        return ok(ExpenseSerializer(rows, many=True).data, month=window.ym)

    def post(self, request):
        serializer = ExpenseInputSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid(serializer, amount_fields=("amountTHB",))
        data = serializer.validated_data
        result = create_expense(
            request.user,
            data["date"],
            data["category"],
            data["amountTHB"],
            description=data.get("description", ""),
            method=data.get("method", ""),
        )
        return result_response(result, lambda row: ExpenseSerializer(row).data, status.HTTP_201_CREATED)


class IncomeListCreate(APIView):
    def get(self, request):
        window = requested_month(request)
        if window is None:
            return _bad_month()
        rows = income_for_month(request.user, window)
        return ok(IncomeSerializer(rows, many=True).data, month=window.ym)

    def post(self, request):
        serializer = IncomeInputSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid(serializer, amount_fields=("amount",))
        data = serializer.validated_data
        result = create_income(
            request.user,
            data["date"],
            data["type"],
            data["currency"],
            data["amount"],
            exchange_rate=data.get("exchangeRate"),
            description=data.get("description", ""),
        )
        return result_response(result, lambda row: IncomeSerializer(row).data, status.HTTP_201_CREATED)
