"""
Month-level read side: the totals behind the dashboard, the monthly report
and ``/api/reports/monthly/``.
"""

import logging
from dataclasses import dataclass

from django.db.models import Sum

from clients.models import AdSpend
from core.money import to_number
from core.periods import safe_month_window
from invoicing.models import ClientInvoice, ClientPayment
from ledger.models import Expense, Income
from training.services import training_paid_thb

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlySummary:
    ym: str
    income_thb: float = 0.0
    expense_thb: float = 0.0
    ad_spend_thb: float = 0.0
    invoice_total_thb: float = 0.0
    invoice_paid_thb: float = 0.0
    training_paid_thb: float = 0.0

    @property
    def net_thb(self) -> float:
        return self.income_thb - self.expense_thb

    @property
    def outstanding_thb(self) -> float:
        return max(self.invoice_total_thb - self.invoice_paid_thb, 0.0)


def _sum(queryset, field) -> float:
    return to_number(queryset.aggregate(total=Sum(field))["total"])


def aggregate_month(owner, period_ym=None) -> MonthlySummary:
    """
    Sum one owner's month. Missing or malformed ``period_ym`` means the
    current month. Invoices count toward the month their period starts in,
    together with every payment made against them.
    """
    window = safe_month_window(period_ym)
    in_window = {"date__gte": window.start, "date__lt": window.end}
    invoices = ClientInvoice.objects.filter(
        client__owner=owner,
        period_start__gte=window.start,
        period_start__lt=window.end,
    )
    summary = MonthlySummary(
        ym=window.ym,
        income_thb=_sum(Income.objects.filter(owner=owner, **in_window), "amount_thb"),
        expense_thb=_sum(Expense.objects.filter(owner=owner, **in_window), "amount_thb"),
        ad_spend_thb=_sum(AdSpend.objects.filter(owner=owner, **in_window), "billed_amount"),
        invoice_total_thb=_sum(invoices, "total_thb"),
        invoice_paid_thb=_sum(ClientPayment.objects.filter(invoice__in=invoices), "amount_thb"),
        training_paid_thb=training_paid_thb(owner, window),
    )
    logger.debug("Aggregated %s for owner %s: %s", window.ym, owner.pk, summary)
    return summary
