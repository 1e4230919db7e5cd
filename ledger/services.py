import logging

from core.money import THB, amount_error, convert_to_thb, to_decimal
from core.results import INVALID_AMOUNT, VALIDATION, ServiceResult
from .models import Expense, Income

logger = logging.getLogger(__name__)


def create_expense(owner, date, category, amount_thb, description="", method=""):
    amount = to_decimal(amount_thb)
    problem = amount_error(amount)
    if problem:
        return ServiceResult.failure(INVALID_AMOUNT, "Invalid amount", {"amountTHB": [problem]})
    expense = Expense.objects.create(
        owner=owner,
        date=date,
        category=category,
        description=description or "",
        amount_thb=amount,
        method=method or "",
    )
    logger.info("Expense %s: %.2f THB (%s)", expense.pk, amount, category)
    return ServiceResult.success(expense)


def create_income(owner, date, income_type, currency, amount, exchange_rate=None, description=""):
    amount_d = to_decimal(amount)
    problem = amount_error(amount_d)
    if problem:
        return ServiceResult.failure(INVALID_AMOUNT, "Invalid amount", {"amount": [problem]})
    currency = currency or THB
    rate_d = to_decimal(exchange_rate, places=4) or None
    if currency != THB and (rate_d is None or rate_d <= 0):
        return ServiceResult.failure(
            VALIDATION,
            f"Exchange rate required for {currency}",
            {"exchangeRate": [f"Exchange rate required for {currency}."]},
        )
    rate_problem = amount_error(rate_d, max_digits=12, places=4) if rate_d is not None else None
    if rate_problem:
        return ServiceResult.failure(VALIDATION, "Invalid exchange rate", {"exchangeRate": [rate_problem]})
    amount_thb = to_decimal(convert_to_thb(amount_d, currency, rate_d))
    if amount_error(amount_thb, allow_zero=True):
        return ServiceResult.failure(INVALID_AMOUNT, "Invalid amount", {"amount": ["Amount is too large."]})
    income = Income.objects.create(
        owner=owner,
        date=date,
        type=income_type,
        description=description or "",
        currency=currency,
        amount=amount_d,
        exchange_rate=rate_d,
        amount_thb=amount_thb,
    )
    logger.info("Income %s: %.2f %s -> %s THB", income.pk, amount_d, currency, income.amount_thb)
    return ServiceResult.success(income)


def expenses_for_month(owner, window):
    return Expense.objects.filter(owner=owner, date__gte=window.start, date__lt=window.end)


def income_for_month(owner, window):
    return Income.objects.filter(owner=owner, date__gte=window.start, date__lt=window.end)
