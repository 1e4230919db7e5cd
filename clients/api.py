from rest_framework import status
from rest_framework.views import APIView

from core.api import fail, invalid, ok, requested_month, result_response
from .models import Client
from .serializers import AdSourceSerializer, AdSpendInputSerializer, AdSpendSerializer, ClientSerializer
from .services import ad_spend_for_month, create_ad_spend, get_client


class ClientListCreate(APIView):
    def get(self, request):
        qs = Client.objects.filter(owner=request.user)
        return ok(ClientSerializer(qs, many=True).data)

    def post(self, request):
        serializer = ClientSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid(serializer)
        serializer.save(owner=request.user)
        return ok(serializer.data, http_status=status.HTTP_201_CREATED)


class AdSourceCreate(APIView):
    def post(self, request):
        serializer = AdSourceSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid(serializer)
        client = get_client(request.user, serializer.validated_data.pop("clientId"))
        if not client:
            return fail("Client not found", status.HTTP_404_NOT_FOUND, code="not_found")
        serializer.save(client=client)
        return ok(serializer.data, http_status=status.HTTP_201_CREATED)


class AdSpendListCreate(APIView):
    def get(self, request):
        window = requested_month(request)
        if window is None:
            return fail("month must be YYYY-MM", fields={"month": ["Invalid month."]}, code="validation")
        qs = ad_spend_for_month(request.user, window)
        return ok(AdSpendSerializer(qs, many=True).data, month=window.ym)

    def post(self, request):
        serializer = AdSpendInputSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid(serializer, amount_fields=("spendAmount", "rateUsed"))
        data = serializer.validated_data
        result = create_ad_spend(
            request.user,
            data["clientId"],
            data["date"],
            data["spendAmount"],
            data["rateUsed"],
            platform=data["platform"],
            source_id=data.get("sourceId"),
            note=data.get("note", ""),
        )
        return result_response(
            result, lambda row: AdSpendSerializer(row).data, http_status=status.HTTP_201_CREATED
        )
