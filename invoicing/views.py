from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_POST

from core.money import to_number
from core.views import month_context
from .forms import GenerateInvoiceForm, PaymentForm
from .services import generate_invoice, invoices_for_month, record_payment


def _back(ym):
    return redirect(f"{reverse('invoicing:index')}?month={ym}")


@login_required
def index(request):
    window, ctx = month_context(request, "invoices")
    invoices = list(invoices_for_month(request.user, window))
    total = sum(to_number(inv.total_thb) for inv in invoices)
    paid = sum(inv.paid_thb() for inv in invoices)
    ctx.update(
        {
            "invoices": invoices,
            "generate_form": GenerateInvoiceForm(owner=request.user),
            "payment_form": PaymentForm(),
            "total_thb": total,
            "paid_thb": paid,
            "outstanding_thb": max(total - paid, 0.0),
        }
    )
    return render(request, "invoicing/index.html", ctx)


@login_required
@require_POST
def generate(request):
    window, _ = month_context(request, "invoices")
    form = GenerateInvoiceForm(request.POST, owner=request.user)
    if not form.is_valid():
        messages.error(request, "Pick a client to invoice.")
        return _back(window.ym)
    result = generate_invoice(request.user, form.cleaned_data["client"].pk, window.ym)
    if not result.ok:
        messages.error(request, result.message)
    elif result.note:
        messages.info(request, f"{result.note}: {result.data.number}")
    else:
        messages.success(request, f"Invoice {result.data.number} created.")
    return _back(window.ym)


@login_required
@require_POST
def add_payment(request, invoice_id: int):
    window, _ = month_context(request, "invoices")
    form = PaymentForm(request.POST)
    if not form.is_valid():
        for field, errs in form.errors.items():
            messages.error(request, f"{field}: {' '.join(errs)}")
        return _back(window.ym)
    data = form.cleaned_data
    result = record_payment(
        request.user,
        invoice_id,
        data["date"],
        data["amount_thb"],
        method=data["method"],
        note=data["note"],
    )
    if result.ok:
        messages.success(request, f"Payment recorded. {result.data.number} is now {result.data.status}.")
    else:
        messages.error(request, result.message)
    return _back(window.ym)
