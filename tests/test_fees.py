import pytest

from invoicing.fees import FIXED_MONTHLY, HYBRID, PERCENT_OF_SPEND, FeeBreakdown, compute_fee


def test_percent_of_spend():
    fee = compute_fee(PERCENT_OF_SPEND, 10000, 15, 3000)
    assert fee == FeeBreakdown(manage_fee_thb=1500.0, fixed_fee_thb=0.0)


def test_fixed_monthly_ignores_spend():
    fee = compute_fee(FIXED_MONTHLY, 10000, 15, 3000)
    assert fee.manage_fee_thb == 0.0
    assert fee.fixed_fee_thb == 3000.0


def test_hybrid_charges_both():
    fee = compute_fee(HYBRID, 20000, 10, 2500)
    assert fee.manage_fee_thb == 2000.0
    assert fee.fixed_fee_thb == 2500.0
    assert fee.total_fee_thb == 4500.0


def test_unknown_fee_type_bills_as_percent():
    assert compute_fee("LEGACY", 1000, 10, 500) == compute_fee(PERCENT_OF_SPEND, 1000, 10, 500)
    assert compute_fee(None, 1000, 10, 500).manage_fee_thb == 100.0


def test_negative_inputs_are_clamped():
    fee = compute_fee(HYBRID, -500, -5, -100)
    assert fee.manage_fee_thb == 0.0
    assert fee.fixed_fee_thb == 0.0


def test_string_inputs_are_normalized():
    fee = compute_fee(PERCENT_OF_SPEND, "12345.67", "7.5", None)
    assert fee.manage_fee_thb == pytest.approx(12345.67 * 7.5 / 100)
