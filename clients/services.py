import logging

from core.lookups import as_pk, owned
from core.money import amount_error, billed_amount, to_decimal
from core.results import INVALID_AMOUNT, NOT_FOUND, ServiceResult
from .models import AdSource, AdSpend, Client

logger = logging.getLogger(__name__)


def get_client(owner, client_id):
    """Owner-scoped lookup; ``None`` for unknown or malformed ids."""
    return owned(Client.objects.all(), owner, client_id)


def create_ad_spend(owner, client_id, date, spend_amount, rate_used, platform="FACEBOOK", source_id=None, note=""):
    client = get_client(owner, client_id)
    if not client:
        return ServiceResult.failure(NOT_FOUND, "Client not found")
    spend_d = to_decimal(spend_amount)
    rate_d = to_decimal(rate_used, places=4)
    billed_d = to_decimal(billed_amount(spend_d, rate_d))
    errors = {}
    spend_error = amount_error(spend_d) or amount_error(billed_d, allow_zero=True)
    if spend_error:
        errors["spendAmount"] = [spend_error]
    rate_error = amount_error(rate_d, max_digits=10, places=4)
    if rate_error:
        errors["rateUsed"] = [rate_error]
    if errors:
        return ServiceResult.failure(INVALID_AMOUNT, "Invalid amount", errors)
    source = None
    if source_id:
        source = AdSource.objects.filter(client=client, pk=as_pk(source_id)).first()
        if not source:
            return ServiceResult.failure(NOT_FOUND, "Ad source not found")
    row = AdSpend.objects.create(
        owner=owner,
        client=client,
        source=source,
        date=date,
        platform=platform or "FACEBOOK",
        spend_amount=spend_d,
        rate_used=rate_d,
        billed_amount=billed_d,
        note=note or "",
    )
    logger.info("Ad spend %s booked for client %s: %s USD @ %s", row.pk, client.pk, spend_d, rate_d)
    return ServiceResult.success(row)


def ad_spend_for_month(owner, window, client=None):
    qs = (
        AdSpend.objects.select_related("client", "source")
        .filter(owner=owner, date__gte=window.start, date__lt=window.end)
    )
    if client is not None:
        qs = qs.filter(client=client)
    return qs
