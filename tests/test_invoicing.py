from datetime import date
from decimal import Decimal

import pytest

from clients.models import Client
from core.results import INVALID_AMOUNT, NOT_FOUND, VALIDATION
from invoicing.models import ClientInvoice, ClientPayment
from invoicing.services import (
    ALREADY_EXISTED,
    PAID_EPSILON_THB,
    compute_status,
    generate_invoice,
    record_payment,
    recompute_status,
)

pytestmark = pytest.mark.django_db

MONTH = "2025-01"


# ---------------------------------------------------------------------------
# Status rule
# ---------------------------------------------------------------------------

def test_compute_status_boundaries():
    assert compute_status(0, 100) == ClientInvoice.UNPAID
    assert compute_status(None, 100) == ClientInvoice.UNPAID
    assert compute_status(50, 100) == ClientInvoice.PARTIAL
    assert compute_status(99.99, 100) == ClientInvoice.PARTIAL
    assert compute_status(100 - PAID_EPSILON_THB / 2, 100) == ClientInvoice.PAID
    assert compute_status(100, 100) == ClientInvoice.PAID
    assert compute_status(150, 100) == ClientInvoice.PAID


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def test_percent_client_with_spend(owner, make_client, add_spend):
    client = make_client(fee_percent="15")
    add_spend(client, 250, 40)

    result = generate_invoice(owner, client.pk, MONTH)

    assert result.ok and result.note is None
    inv = result.data
    assert inv.spend_thb == Decimal("10000.00")
    assert inv.manage_fee_thb == Decimal("1500.00")
    assert inv.fixed_fee_thb == Decimal("0.00")
    assert inv.total_thb == Decimal("11500.00")
    assert inv.status == ClientInvoice.UNPAID
    assert inv.period_start == date(2025, 1, 1)
    assert inv.period_end == date(2025, 2, 1)
    assert inv.number == f"INV-202501-{inv.pk:05d}"


def test_fixed_client_without_spend(owner, make_client):
    client = make_client(fee_type=Client.FIXED_MONTHLY, fee_percent="0", fixed="3000")
    inv = generate_invoice(owner, client.pk, MONTH).data
    assert inv.spend_thb == Decimal("0.00")
    assert inv.total_thb == Decimal("3000.00")
    assert inv.status == ClientInvoice.UNPAID


def test_hybrid_client(owner, make_client, add_spend):
    client = make_client(fee_type=Client.HYBRID, fee_percent="10", fixed="2500")
    add_spend(client, 500, 40)
    inv = generate_invoice(owner, client.pk, MONTH).data
    assert inv.total_thb == Decimal("20000.00") + Decimal("2000.00") + Decimal("2500.00")


def test_zero_invoice_is_paid_at_generation(owner, make_client):
    client = make_client(fee_percent="0")
    inv = generate_invoice(owner, client.pk, MONTH).data
    assert inv.total_thb == Decimal("0.00")
    assert inv.status == ClientInvoice.PAID


def test_only_spend_inside_the_month_counts(owner, make_client, add_spend):
    client = make_client(fee_percent="10")
    add_spend(client, 100, 40, on=date(2025, 1, 1))
    add_spend(client, 100, 40, on=date(2025, 1, 31))
    add_spend(client, 999, 40, on=date(2025, 2, 1))
    add_spend(client, 999, 40, on=date(2024, 12, 31))
    inv = generate_invoice(owner, client.pk, MONTH).data
    assert inv.spend_thb == Decimal("8000.00")


def test_generation_is_idempotent(owner, make_client, add_spend):
    client = make_client()
    add_spend(client, 250, 40)
    first = generate_invoice(owner, client.pk, MONTH)
    add_spend(client, 100, 40, on=date(2025, 1, 20))
    second = generate_invoice(owner, client.pk, MONTH)

    assert second.ok
    assert second.note == ALREADY_EXISTED
    assert second.data.pk == first.data.pk
    assert second.data.total_thb == Decimal("11500.00")
    assert ClientInvoice.objects.filter(client=client).count() == 1


def test_generate_returns_invoice_from_concurrent_writer(owner, make_client, monkeypatch):
    client = make_client()
    competing = {}

    def spend_while_another_request_inserts(c, window):
        competing["invoice"] = ClientInvoice.objects.create(
            client=c, period_start=window.start, period_end=window.end
        )
        return 0.0

    monkeypatch.setattr("invoicing.services.billed_spend_thb", spend_while_another_request_inserts)
    result = generate_invoice(owner, client.pk, MONTH)

    assert result.ok
    assert result.note == ALREADY_EXISTED
    assert result.data.pk == competing["invoice"].pk
    assert ClientInvoice.objects.filter(client=client).count() == 1


def test_generate_rejects_bad_month(owner, make_client):
    client = make_client()
    for bad in ("2025-13", "", None, "January"):
        result = generate_invoice(owner, client.pk, bad)
        assert not result.ok
        assert result.code == VALIDATION
        assert result.http_status == 400


def test_generate_requires_client(owner):
    result = generate_invoice(owner, None, MONTH)
    assert result.code == VALIDATION
    assert "clientId" in result.fields


def test_generate_unknown_client(owner):
    result = generate_invoice(owner, 99999, MONTH)
    assert result.code == NOT_FOUND
    assert result.http_status == 404
    assert generate_invoice(owner, "not-a-number", MONTH).code == NOT_FOUND


def test_generate_scoped_to_owner(other_owner, make_client):
    client = make_client()
    assert generate_invoice(other_owner, client.pk, MONTH).code == NOT_FOUND
    assert not ClientInvoice.objects.exists()


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

@pytest.fixture
def invoice(owner, make_client, add_spend):
    client = make_client(fee_percent="15")
    add_spend(client, 250, 40)
    return generate_invoice(owner, client.pk, MONTH).data


def test_full_payment_marks_paid(owner, invoice):
    result = record_payment(owner, invoice.pk, date(2025, 2, 3), 11500, method="BANK_TRANSFER")
    assert result.ok
    assert result.data.status == ClientInvoice.PAID
    assert result.data.outstanding_thb() == 0.0


def test_partial_payment(owner, invoice):
    result = record_payment(owner, invoice.pk, date(2025, 2, 3), "5000")
    inv = result.data
    assert inv.status == ClientInvoice.PARTIAL
    assert inv.paid_thb() == 5000.0
    assert inv.outstanding_thb() == 6500.0


def test_status_moves_forward_as_payments_add_up(owner, invoice):
    seen = []
    for amount in (1000, 4000, 6500):
        seen.append(record_payment(owner, invoice.pk, date(2025, 2, 3), amount).data.status)
    assert seen == [ClientInvoice.PARTIAL, ClientInvoice.PARTIAL, ClientInvoice.PAID]
    assert ClientPayment.objects.filter(invoice=invoice).count() == 3


def test_overpayment_keeps_outstanding_at_zero(owner, invoice):
    inv = record_payment(owner, invoice.pk, date(2025, 2, 3), 12000).data
    assert inv.status == ClientInvoice.PAID
    assert inv.outstanding_thb() == 0.0


@pytest.mark.parametrize("amount", [0, -10, "abc", None])
def test_payment_rejects_non_positive_amounts(owner, invoice, amount):
    result = record_payment(owner, invoice.pk, date(2025, 2, 3), amount)
    assert result.code == INVALID_AMOUNT
    assert result.http_status == 400
    assert not ClientPayment.objects.exists()


@pytest.mark.parametrize("amount", [0.004, "0.001", 1e20, 10**400])
def test_payment_rejects_amounts_that_do_not_fit_the_column(owner, invoice, amount):
    result = record_payment(owner, invoice.pk, date(2025, 2, 3), amount)
    assert result.code == INVALID_AMOUNT
    assert "amountTHB" in result.fields
    assert not ClientPayment.objects.exists()


def test_payment_rounds_to_cents(owner, invoice):
    result = record_payment(owner, invoice.pk, date(2025, 2, 3), 0.005)
    assert result.ok
    assert ClientPayment.objects.get().amount_thb == Decimal("0.01")


def test_payment_unknown_invoice(owner):
    assert record_payment(owner, 424242, date(2025, 2, 3), 100).code == NOT_FOUND


def test_payment_scoped_to_owner(other_owner, invoice):
    assert record_payment(other_owner, invoice.pk, date(2025, 2, 3), 100).code == NOT_FOUND
    invoice.refresh_from_db()
    assert invoice.status == ClientInvoice.UNPAID


def test_recompute_status_from_stored_payments(invoice):
    ClientPayment.objects.create(invoice=invoice, date=date(2025, 2, 1), amount_thb=Decimal("11500.00"))
    assert recompute_status(invoice) == ClientInvoice.PAID
    invoice.refresh_from_db()
    assert invoice.status == ClientInvoice.PAID
