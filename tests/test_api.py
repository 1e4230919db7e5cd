import pytest
from django.urls import reverse
from rest_framework.test import APIClient

from clients.models import AdSpend
from invoicing.models import ClientInvoice, ClientPayment
from invoicing.services import ALREADY_EXISTED
from ledger.models import Expense, Income

pytestmark = pytest.mark.django_db

INVOICES = "/api/invoices/"


def _pay_url(invoice_id):
    return reverse("api:invoice_payments", args=[invoice_id])


# ---------------------------------------------------------------------------
# Invoices
# ---------------------------------------------------------------------------

def test_generate_then_list(api, make_client, add_spend):
    client = make_client(fee_percent="15")
    add_spend(client, 250, 40)

    resp = api.post(INVOICES, {"month": "2025-01", "clientId": client.pk}, format="json")
    assert resp.status_code == 201
    body = resp.json()
    assert body["ok"] is True
    assert "note" not in body
    data = body["data"]
    assert data["totalTHB"] == 11500.0
    assert data["spendTHB"] == 10000.0
    assert data["manageFeeTHB"] == 1500.0
    assert data["status"] == "UNPAID"
    assert data["month"] == "2025-01"
    assert data["periodStart"] == "2025-01-01"
    assert data["periodEnd"] == "2025-02-01"
    assert data["outstandingTHB"] == 11500.0
    assert data["payments"] == []

    listing = api.get(INVOICES, {"month": "2025-01"}).json()
    assert listing["ok"] is True
    assert listing["month"] == "2025-01"
    assert [inv["id"] for inv in listing["data"]] == [data["id"]]
    assert api.get(INVOICES, {"month": "2025-02"}).json()["data"] == []


def test_generate_twice_returns_note(api, make_client):
    client = make_client()
    first = api.post(INVOICES, {"month": "2025-01", "clientId": client.pk}, format="json").json()
    resp = api.post(INVOICES, {"month": "2025-01", "clientId": str(client.pk)}, format="json")
    assert resp.status_code == 200
    body = resp.json()
    assert body["note"] == ALREADY_EXISTED
    assert body["data"]["id"] == first["data"]["id"]


def test_generate_validation_errors(api, make_client):
    client = make_client()
    resp = api.post(INVOICES, {"month": "2025-1", "clientId": client.pk}, format="json")
    assert resp.status_code == 400
    body = resp.json()
    assert body["ok"] is False
    assert "month" in body["error"]["fields"]

    resp = api.post(INVOICES, {"month": "2025-01"}, format="json")
    assert resp.status_code == 400
    assert "clientId" in resp.json()["error"]["fields"]


def test_generate_unknown_client_is_404(api, other_owner, make_client):
    foreign = make_client(for_owner=other_owner)
    resp = api.post(INVOICES, {"month": "2025-01", "clientId": foreign.pk}, format="json")
    assert resp.status_code == 404
    assert resp.json() == {
        "ok": False,
        "error": {"message": "Client not found", "code": "not_found", "fields": {}},
    }


def test_list_rejects_bad_month(api):
    resp = api.get(INVOICES, {"month": "2025-13"})
    assert resp.status_code == 400
    assert resp.json()["ok"] is False


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------

@pytest.fixture
def invoice_id(api, make_client, add_spend):
    client = make_client(fee_percent="15")
    add_spend(client, 250, 40)
    return api.post(INVOICES, {"month": "2025-01", "clientId": client.pk}, format="json").json()["data"]["id"]


def test_partial_then_full_payment(api, invoice_id):
    resp = api.post(_pay_url(invoice_id), {"date": "2025-02-01", "amountTHB": 5000, "method": "CASH"}, format="json")
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["status"] == "PARTIAL"
    assert data["paidTHB"] == 5000.0
    assert data["outstandingTHB"] == 6500.0
    assert data["payments"][0]["amountTHB"] == 5000.0
    assert data["payments"][0]["method"] == "CASH"

    data = api.post(_pay_url(invoice_id), {"date": "2025-02-10", "amountTHB": "6500"}, format="json").json()["data"]
    assert data["status"] == "PAID"
    assert data["outstandingTHB"] == 0.0


def test_payment_invalid_amount(api, invoice_id):
    resp = api.post(_pay_url(invoice_id), {"date": "2025-02-01", "amountTHB": 0}, format="json")
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_amount"
    assert ClientInvoice.objects.get(pk=invoice_id).status == "UNPAID"


@pytest.mark.parametrize("amount", [0.004, 1e20, "1e400"])
def test_payment_amount_must_fit_in_cents(api, invoice_id, amount):
    resp = api.post(_pay_url(invoice_id), {"date": "2025-02-01", "amountTHB": amount}, format="json")
    assert resp.status_code == 400
    body = resp.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "invalid_amount"
    assert "amountTHB" in body["error"]["fields"]
    assert not ClientPayment.objects.exists()


def test_payment_missing_fields(api, invoice_id):
    resp = api.post(_pay_url(invoice_id), {"amountTHB": 10}, format="json")
    assert resp.status_code == 400
    assert "date" in resp.json()["error"]["fields"]


def test_payment_unknown_invoice(api):
    resp = api.post(_pay_url(987654), {"date": "2025-02-01", "amountTHB": 10}, format="json")
    assert resp.status_code == 404


def test_payment_on_someone_elses_invoice(invoice_id, other_owner):
    intruder = APIClient()
    intruder.force_authenticate(user=other_owner)
    resp = intruder.post(_pay_url(invoice_id), {"date": "2025-02-01", "amountTHB": 10}, format="json")
    assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Clients, spend, ledger, reports
# ---------------------------------------------------------------------------

def test_client_create_and_list(api):
    resp = api.post(
        "/api/clients/",
        {"name": "Golden Tea", "feeType": "HYBRID", "feePercent": 12.5, "fixedMonthlyTHB": 2000},
        format="json",
    )
    assert resp.status_code == 201
    created = resp.json()["data"]
    assert created["feeType"] == "HYBRID"
    assert created["invoiceCurrency"] == "THB"

    listing = api.get("/api/clients/").json()["data"]
    assert [c["name"] for c in listing] == ["Golden Tea"]


def test_client_rejects_out_of_range_percent(api):
    resp = api.post("/api/clients/", {"name": "X", "feePercent": 150}, format="json")
    assert resp.status_code == 400
    assert "feePercent" in resp.json()["error"]["fields"]


def test_ad_source_and_spend(api, make_client):
    client = make_client()
    source = api.post(
        "/api/ad-sources/", {"clientId": client.pk, "type": "Facebook page", "name": "Shwe Cafe FB"}, format="json"
    ).json()["data"]

    resp = api.post(
        "/api/adspend/",
        {"date": "2025-01-07", "clientId": client.pk, "sourceId": source["id"], "spendAmount": 100, "rateUsed": 35.5},
        format="json",
    )
    assert resp.status_code == 201
    row = resp.json()["data"]
    assert row["billedAmount"] == 3550.0
    assert row["source"] == "Shwe Cafe FB"

    listing = api.get("/api/adspend/", {"month": "2025-01"}).json()
    assert len(listing["data"]) == 1


@pytest.mark.parametrize(
    "payload",
    [
        {"spendAmount": 0.004, "rateUsed": 36},
        {"spendAmount": 100, "rateUsed": 0.00004},
        {"spendAmount": 1e20, "rateUsed": 36},
        {"spendAmount": 100, "rateUsed": 1e20},
    ],
)
def test_ad_spend_rejects_amounts_that_do_not_fit(api, make_client, payload):
    client = make_client()
    resp = api.post("/api/adspend/", {"date": "2025-01-07", "clientId": client.pk, **payload}, format="json")
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_amount"
    assert not AdSpend.objects.exists()


def test_ledger_rejects_amounts_that_do_not_fit(api):
    resp = api.post("/api/expenses/", {"date": "2025-01-04", "category": "Rent", "amountTHB": 1e20}, format="json")
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_amount"

    resp = api.post(
        "/api/income/", {"date": "2025-01-03", "type": "Retainer", "currency": "THB", "amount": 0.004}, format="json"
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "invalid_amount"

    resp = api.post(
        "/api/income/",
        {"date": "2025-01-03", "type": "Retainer", "currency": "USD", "amount": 300, "exchangeRate": 1e20},
        format="json",
    )
    assert resp.status_code == 400
    assert "exchangeRate" in resp.json()["error"]["fields"]
    assert not Expense.objects.exists()
    assert not Income.objects.exists()


def test_income_requires_rate_for_foreign_currency(api):
    resp = api.post(
        "/api/income/", {"date": "2025-01-03", "type": "Retainer", "currency": "USD", "amount": 300}, format="json"
    )
    assert resp.status_code == 400
    assert "exchangeRate" in resp.json()["error"]["fields"]

    resp = api.post(
        "/api/income/",
        {"date": "2025-01-03", "type": "Retainer", "currency": "USD", "amount": 300, "exchangeRate": 35},
        format="json",
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["amountTHB"] == 10500.0


def test_monthly_report(api, owner, make_client, add_spend):
    api.post("/api/expenses/", {"date": "2025-01-04", "category": "Ads tools", "amountTHB": 800}, format="json")
    client = make_client(fee_percent="15")
    add_spend(client, 250, 40)
    api.post(INVOICES, {"month": "2025-01", "clientId": client.pk}, format="json")

    body = api.get("/api/reports/monthly/", {"month": "2025-01"}).json()
    assert body["ok"] is True
    data = body["data"]
    assert data["month"] == "2025-01"
    assert data["expenseTHB"] == 800.0
    assert data["netTHB"] == -800.0
    assert data["adSpendTHB"] == 10000.0
    assert data["invoiceTotalTHB"] == 11500.0
    assert data["outstandingTHB"] == 11500.0


def test_api_requires_authentication():
    resp = APIClient().get(INVOICES)
    assert resp.status_code in (401, 403)
    body = resp.json()
    assert body["ok"] is False
    assert body["error"]["message"]


def test_unhandled_errors_become_500_envelope(api, make_client, monkeypatch):
    client = make_client()

    def boom(*args, **kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr("invoicing.api.generate_invoice", boom)
    api.raise_request_exception = False
    resp = api.post(INVOICES, {"month": "2025-01", "clientId": client.pk}, format="json")
    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "server_error"


def test_invoice_detail(api, invoice_id, other_owner):
    resp = api.get(reverse("api:invoice_detail", args=[invoice_id]))
    assert resp.status_code == 200
    assert resp.json()["data"]["totalTHB"] == 11500.0

    intruder = APIClient()
    intruder.force_authenticate(user=other_owner)
    assert intruder.get(reverse("api:invoice_detail", args=[invoice_id])).status_code == 404
