import logging

from django.db import IntegrityError, transaction
from django.db.models import Sum

from clients.models import AdSpend
from clients.services import get_client
from core.lookups import as_pk
from core.money import amount_error, to_decimal, to_number
from core.periods import is_valid_ym, month_window
from core.results import INVALID_AMOUNT, NOT_FOUND, VALIDATION, ServiceResult
from .fees import fee_for_client
from .models import ClientInvoice, ClientPayment

logger = logging.getLogger(__name__)

# Tolerance on the PAID boundary; applied wherever status is derived.
PAID_EPSILON_THB = 1e-4

ALREADY_EXISTED = "Invoice already existed"


def compute_status(total_paid, total) -> str:
    paid = to_number(total_paid)
    if paid <= 0:
        return ClientInvoice.UNPAID
    if paid >= to_number(total) - PAID_EPSILON_THB:
        return ClientInvoice.PAID
    return ClientInvoice.PARTIAL


def initial_status(total) -> str:
    # Nothing to collect on a zero invoice.
    return ClientInvoice.PAID if to_number(total) <= 0 else ClientInvoice.UNPAID


def billed_spend_thb(client, window) -> float:
    agg = AdSpend.objects.filter(
        client=client, date__gte=window.start, date__lt=window.end
    ).aggregate(total=Sum("billed_amount"))
    return to_number(agg["total"])


def _with_payments(invoice_id):
    return (
        ClientInvoice.objects.select_related("client")
        .prefetch_related("payments")
        .get(pk=invoice_id)
    )


def get_invoice(owner, invoice_id):
    pk = as_pk(invoice_id)
    if pk is None:
        return None
    return (
        ClientInvoice.objects.select_related("client")
        .prefetch_related("payments")
        .filter(client__owner=owner, pk=pk)
        .first()
    )


def invoices_for_month(owner, window):
    """Invoices whose period starts inside ``window``, newest first."""
    return (
        ClientInvoice.objects.select_related("client")
        .prefetch_related("payments")
        .filter(
            client__owner=owner,
            period_start__gte=window.start,
            period_start__lt=window.end,
        )
        .order_by("-created_at", "-id")
    )


def generate_invoice(owner, client_id, period_ym) -> ServiceResult:
    """
    Create the invoice for one client and month.

    Idempotent per (client, month): when one exists it is returned untouched
    with a note instead of an error.
    """
    if not is_valid_ym(period_ym):
        return ServiceResult.failure(VALIDATION, "month must be YYYY-MM", {"month": ["Invalid month."]})
    if not client_id:
        return ServiceResult.failure(VALIDATION, "clientId is required", {"clientId": ["This field is required."]})
    client = get_client(owner, client_id)
    if not client:
        return ServiceResult.failure(NOT_FOUND, "Client not found")

    window = month_window(period_ym)
    existing = ClientInvoice.objects.filter(client=client, period_start=window.start).first()
    if existing:
        logger.info("Invoice %s already exists for client %s %s", existing.pk, client.pk, window.ym)
        return ServiceResult.success(_with_payments(existing.pk), note=ALREADY_EXISTED)

    spend_thb = billed_spend_thb(client, window)
    fee = fee_for_client(client, spend_thb)
    total_thb = spend_thb + fee.manage_fee_thb + fee.fixed_fee_thb

    try:
        with transaction.atomic():
            invoice = ClientInvoice.objects.create(
                client=client,
                period_start=window.start,
                period_end=window.end,
                spend_thb=to_decimal(spend_thb),
                manage_fee_thb=to_decimal(fee.manage_fee_thb),
                fixed_fee_thb=to_decimal(fee.fixed_fee_thb),
                total_thb=to_decimal(total_thb),
                status=initial_status(total_thb),
            )
    except IntegrityError:
        # Lost a race with a concurrent generate for the same month.
        winner = ClientInvoice.objects.filter(client=client, period_start=window.start).first()
        if winner is None:
            raise
        return ServiceResult.success(_with_payments(winner.pk), note=ALREADY_EXISTED)

    logger.info(
        "Generated invoice %s for client %s %s: spend=%.2f fee=%.2f total=%.2f",
        invoice.pk, client.pk, window.ym, spend_thb, fee.total_fee_thb, total_thb,
    )
    return ServiceResult.success(_with_payments(invoice.pk))


def recompute_status(invoice) -> str:
    """Re-derive ``invoice.status`` from every stored payment and save it when it changed."""
    paid = ClientPayment.objects.filter(invoice=invoice).aggregate(total=Sum("amount_thb"))["total"]
    status = compute_status(paid, invoice.total_thb)
    if status != invoice.status:
        invoice.status = status
        invoice.save(update_fields=["status", "updated_at"])
    return status


def record_payment(owner, invoice_id, date, amount_thb, method=None, note=None) -> ServiceResult:
    """
    Append a payment and recompute the invoice status.

    The insert and the status update share one transaction, and the invoice row
    is locked first so concurrent payments on it are applied one at a time.
    """
    amount = to_decimal(amount_thb)
    problem = amount_error(amount)
    if problem:
        logger.warning("Rejected payment of %r on invoice %s", amount_thb, invoice_id)
        return ServiceResult.failure(INVALID_AMOUNT, "Invalid amountTHB", {"amountTHB": [problem]})
    if not date:
        return ServiceResult.failure(VALIDATION, "date is required", {"date": ["This field is required."]})
    pk = as_pk(invoice_id)
    if pk is None:
        return ServiceResult.failure(NOT_FOUND, "Invoice not found")

    with transaction.atomic():
        invoice = (
            ClientInvoice.objects.select_for_update(of=("self",))
            .filter(client__owner=owner, pk=pk)
            .first()
        )
        if not invoice:
            return ServiceResult.failure(NOT_FOUND, "Invoice not found")
        payment = ClientPayment.objects.create(
            invoice=invoice,
            date=date,
            amount_thb=amount,
            method=method or None,
            note=note or None,
        )
        status = recompute_status(invoice)

    logger.info("Payment %s of %.2f THB on invoice %s -> %s", payment.pk, amount, invoice.pk, status)
    return ServiceResult.success(_with_payments(invoice.pk))
