"""
Management fee rules for client invoices.

PERCENT_OF_SPEND   manage = spend * percent / 100
FIXED_MONTHLY      fixed  = retainer
HYBRID             both, independently

Anything else (unset or legacy values) is billed as PERCENT_OF_SPEND.
"""

from dataclasses import dataclass

from core.money import to_number

PERCENT_OF_SPEND = "PERCENT_OF_SPEND"
FIXED_MONTHLY = "FIXED_MONTHLY"
HYBRID = "HYBRID"


@dataclass(frozen=True)
class FeeBreakdown:
    manage_fee_thb: float
    fixed_fee_thb: float

    @property
    def total_fee_thb(self) -> float:
        return self.manage_fee_thb + self.fixed_fee_thb


def compute_fee(fee_type, spend_thb, fee_percent, fixed_monthly_thb) -> FeeBreakdown:
    spend = max(to_number(spend_thb), 0.0)
    percent = max(to_number(fee_percent), 0.0)
    fixed = max(to_number(fixed_monthly_thb), 0.0)

    if fee_type == FIXED_MONTHLY:
        return FeeBreakdown(manage_fee_thb=0.0, fixed_fee_thb=fixed)
    if fee_type == HYBRID:
        return FeeBreakdown(manage_fee_thb=spend * percent / 100, fixed_fee_thb=fixed)
    return FeeBreakdown(manage_fee_thb=spend * percent / 100, fixed_fee_thb=0.0)


def fee_for_client(client, spend_thb) -> FeeBreakdown:
    return compute_fee(client.fee_type, spend_thb, client.fee_percent, client.fixed_monthly_thb)
