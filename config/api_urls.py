from django.urls import path

from clients import api as clients_api
from invoicing import api as invoicing_api
from ledger import api as ledger_api
from reports import api as reports_api

app_name = "api"

urlpatterns = [
    path("clients/", clients_api.ClientListCreate.as_view(), name="clients"),
    path("ad-sources/", clients_api.AdSourceCreate.as_view(), name="ad_sources"),
    path("adspend/", clients_api.AdSpendListCreate.as_view(), name="adspend"),
    path("invoices/", invoicing_api.InvoiceListCreate.as_view(), name="invoices"),
    path("invoices/<int:invoice_id>/", invoicing_api.InvoiceDetail.as_view(), name="invoice_detail"),
    path(
        "invoices/<int:invoice_id>/payments/",
        invoicing_api.InvoicePaymentCreate.as_view(),
        name="invoice_payments",
    ),
    path("expenses/", ledger_api.ExpenseListCreate.as_view(), name="expenses"),
    path("income/", ledger_api.IncomeListCreate.as_view(), name="income"),
    path("reports/monthly/", reports_api.MonthlyReport.as_view(), name="monthly_report"),
]
