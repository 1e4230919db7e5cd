from django.contrib.auth.decorators import login_required
from django.shortcuts import render

from clients.services import ad_spend_for_month
from core.views import month_context
from invoicing.services import invoices_for_month
from .services import aggregate_month


@login_required
def dashboard(request):
    window, ctx = month_context(request, "dashboard")
    ctx["summary"] = aggregate_month(request.user, window.ym)
    return render(request, "reports/dashboard.html", ctx)


@login_required
def monthly(request):
    window, ctx = month_context(request, "reports")
    ctx.update(
        {
            "summary": aggregate_month(request.user, window.ym),
            "spends": ad_spend_for_month(request.user, window),
            "invoices": invoices_for_month(request.user, window),
        }
    )
    return render(request, "reports/monthly.html", ctx)
