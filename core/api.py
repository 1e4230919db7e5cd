import logging

from rest_framework import serializers, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from .money import to_number
from .periods import is_valid_ym, safe_month_window
from .results import INVALID_AMOUNT, VALIDATION

logger = logging.getLogger(__name__)


class AmountField(serializers.Field):
    """Read-only money column rendered as a plain JSON number."""

    def __init__(self, **kwargs):
        kwargs["read_only"] = True
        super().__init__(**kwargs)

    def to_representation(self, value):
        return to_number(value)


def ok(data, http_status=status.HTTP_200_OK, **extra):
    return Response({"ok": True, **extra, "data": data}, status=http_status)


def fail(message, http_status=status.HTTP_400_BAD_REQUEST, fields=None, code=None):
    return Response(
        {"ok": False, "error": {"message": message, "code": code, "fields": fields or {}}},
        status=http_status,
    )


def invalid(serializer, amount_fields=()):
    """Serializer errors as a 400; a bad money field is reported as ``invalid_amount``."""
    errors = serializer.errors
    code = INVALID_AMOUNT if any(name in errors for name in amount_fields) else VALIDATION
    return fail("Invalid input", fields=errors, code=code)


def result_response(result, render, http_status=status.HTTP_200_OK):
    """Turn a ``ServiceResult`` into the API envelope, rendering its data with ``render``."""
    if not result.ok:
        return fail(result.message, result.http_status, result.fields, result.code)
    extra = {"note": result.note} if result.note else {}
    return ok(render(result.data), http_status=http_status, **extra)


def requested_month(request):
    """``?month=`` as a ``MonthWindow``; ``None`` when present but malformed."""
    ym = request.query_params.get("month")
    if ym and not is_valid_ym(ym):
        return None
    return safe_month_window(ym)


def exception_handler(exc, context):
    response = drf_exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception("Unhandled API error in %s", type(view).__name__ if view else "unknown view")
        return fail("Server error", status.HTTP_500_INTERNAL_SERVER_ERROR, code="server_error")
    detail = response.data
    message = detail.get("detail") if isinstance(detail, dict) else None
    response.data = {
        "ok": False,
        "error": {
            "message": str(message or "Request failed"),
            "code": getattr(exc, "default_code", None),
            "fields": detail if isinstance(detail, dict) and "detail" not in detail else {},
        },
    }
    return response
