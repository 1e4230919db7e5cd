from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import Sum
from django.shortcuts import redirect, render
from django.urls import reverse

from core.money import to_number
from core.views import month_context
from .forms import ExpenseForm, IncomeForm
from .services import create_expense, create_income, expenses_for_month, income_for_month


@login_required
def expenses(request):
    window, ctx = month_context(request, "expenses")
    form = ExpenseForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        data = form.cleaned_data
        result = create_expense(
            request.user,
            data["date"],
            data["category"],
            data["amount_thb"],
            description=data["description"],
            method=data["method"],
        )
        if result.ok:
            messages.success(request, "Expense saved.")
            return redirect(f"{reverse('ledger:expenses')}?month={window.ym}")
        messages.error(request, result.message)
    rows = expenses_for_month(request.user, window)
    ctx.update(
        {
            "form": form,
            "rows": rows,
            "total_thb": to_number(rows.aggregate(total=Sum("amount_thb"))["total"]),
        }
    )
    return render(request, "ledger/expenses.html", ctx)


@login_required
def income(request):
    window, ctx = month_context(request, "income")
    form = IncomeForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        data = form.cleaned_data
        result = create_income(
            request.user,
            data["date"],
            data["type"],
            data["currency"],
            data["amount"],
            exchange_rate=data["exchange_rate"],
            description=data["description"],
        )
        if result.ok:
            messages.success(request, "Income saved.")
            return redirect(f"{reverse('ledger:income')}?month={window.ym}")
        messages.error(request, result.message)
    rows = income_for_month(request.user, window)
    ctx.update(
        {
            "form": form,
            "rows": rows,
            "total_thb": to_number(rows.aggregate(total=Sum("amount_thb"))["total"]),
        }
    )
    return render(request, "ledger/income.html", ctx)
