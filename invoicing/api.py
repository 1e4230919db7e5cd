from rest_framework import status
from rest_framework.views import APIView

from core.api import fail, invalid, ok, requested_month, result_response
from .serializers import GenerateInvoiceSerializer, InvoiceSerializer, RecordPaymentSerializer
from .services import generate_invoice, get_invoice, invoices_for_month, record_payment


def _render(invoice):
    return InvoiceSerializer(invoice).data


class InvoiceListCreate(APIView):
    def get(self, request):
        window = requested_month(request)
        if window is None:
            return fail("month must be YYYY-MM", fields={"month": ["Invalid month."]}, code="validation")
        invoices = invoices_for_month(request.user, window)
        return ok(InvoiceSerializer(invoices, many=True).data, month=window.ym)

    def post(self, request):
        serializer = GenerateInvoiceSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid(serializer)
        data = serializer.validated_data
        result = generate_invoice(request.user, data["clientId"], data["month"])
        created = result.ok and not result.note
        return result_response(
            result, _render, http_status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )


class InvoiceDetail(APIView):
    def get(self, request, invoice_id):
        invoice = get_invoice(request.user, invoice_id)
        if not invoice:
            return fail("Invoice not found", status.HTTP_404_NOT_FOUND, code="not_found")
        return ok(_render(invoice))


class InvoicePaymentCreate(APIView):
    def post(self, request, invoice_id):
        serializer = RecordPaymentSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid(serializer, amount_fields=("amountTHB",))
        data = serializer.validated_data
        result = record_payment(
            request.user,
            invoice_id,
            data["date"],
            data["amountTHB"],
            method=data.get("method"),
            note=data.get("note"),
        )
        return result_response(result, _render, http_status=status.HTTP_201_CREATED)
