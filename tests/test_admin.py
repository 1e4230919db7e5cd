from datetime import date
from decimal import Decimal

import pytest
from django.urls import reverse

from invoicing.models import ClientInvoice, ClientPayment
from invoicing.services import generate_invoice

pytestmark = pytest.mark.django_db


@pytest.fixture
def staff(client, django_user_model):
    admin_user = django_user_model.objects.create_superuser(email="admin@example.com", password="x-admin-pass")
    client.force_login(admin_user, backend="django.contrib.auth.backends.ModelBackend")
    return client


@pytest.fixture
def invoice(owner, make_client, add_spend):
    client = make_client(fee_percent="15")
    add_spend(client, 250, 40)
    return generate_invoice(owner, client.pk, "2025-01").data


def test_recompute_action_fixes_drifted_status(staff, invoice):
    # payment written behind the service's back
    ClientPayment.objects.create(invoice=invoice, date=date(2025, 2, 1), amount_thb=Decimal("11500.00"))
    assert ClientInvoice.objects.get(pk=invoice.pk).status == ClientInvoice.UNPAID

    resp = staff.post(
        reverse("admin:invoicing_clientinvoice_changelist"),
        {"action": "recompute_selected", "_selected_action": [invoice.pk]},
    )
    assert resp.status_code == 302
    assert ClientInvoice.objects.get(pk=invoice.pk).status == ClientInvoice.PAID


def test_payment_added_in_admin_updates_status(staff, invoice):
    resp = staff.post(
        reverse("admin:invoicing_clientpayment_add"),
        {"invoice": invoice.pk, "date": "2025-02-01", "amount_thb": "5000", "method": "", "note": ""},
    )
    assert resp.status_code == 302
    assert ClientInvoice.objects.get(pk=invoice.pk).status == ClientInvoice.PARTIAL


def test_admin_changelists_render(staff, invoice):
    for name in (
        "admin:invoicing_clientinvoice_changelist",
        "admin:clients_client_changelist",
        "admin:clients_adspend_changelist",
        "admin:ledger_expense_changelist",
        "admin:ledger_income_changelist",
        "admin:training_enrollment_changelist",
        "admin:accounts_user_changelist",
    ):
        assert staff.get(reverse(name)).status_code == 200


def test_payments_cannot_be_deleted_in_admin(staff, invoice):
    payment = ClientPayment.objects.create(invoice=invoice, date=date(2025, 2, 1), amount_thb=Decimal("5000.00"))
    resp = staff.post(reverse("admin:invoicing_clientpayment_delete", args=[payment.pk]), {"post": "yes"})
    assert resp.status_code == 403
    assert ClientPayment.objects.filter(pk=payment.pk).exists()


def test_payments_cannot_be_edited_in_admin(staff, invoice):
    payment = ClientPayment.objects.create(invoice=invoice, date=date(2025, 2, 1), amount_thb=Decimal("5000.00"))
    resp = staff.post(
        reverse("admin:invoicing_clientpayment_change", args=[payment.pk]),
        {"invoice": invoice.pk, "date": "2025-02-01", "amount_thb": "11500", "method": "", "note": ""},
    )
    assert resp.status_code == 403
    assert ClientPayment.objects.get(pk=payment.pk).amount_thb == Decimal("5000.00")
