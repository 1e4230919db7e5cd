"""
Currency normalization.

The database hands amounts back as ``Decimal``; JSON clients and forms send
floats or strings. Everything that displays or aggregates money goes through
``to_number`` so the arithmetic downstream only ever sees plain floats, and
everything that persists goes through ``to_decimal``.
"""

import math
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation

THB = "THB"
USD = "USD"
MMK = "MMK"

CURRENCY_CHOICES = [(THB, THB), (USD, USD), (MMK, MMK)]

# wide enough for any finite float at four places
_QUANTIZE_CONTEXT = Context(prec=400)


def to_number(value) -> float:
    """Return ``value`` as a finite float, or ``0.0`` when it can't be read as one."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        try:
            num = float(value)
        except (OverflowError, ValueError, ArithmeticError):
            return 0.0
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            num = float(text)
        except ValueError:
            return 0.0
    elif callable(getattr(value, "to_number", None)):
        try:
            num = float(value.to_number())
        except (TypeError, ValueError, ArithmeticError):
            return 0.0
    else:
        try:
            num = float(value)
        except (TypeError, ValueError, ArithmeticError):
            try:
                num = float(str(value))
            except (TypeError, ValueError):
                return 0.0
    if not math.isfinite(num):
        return 0.0
    return num


def to_decimal(value, places: int = 2) -> Decimal:
    """Quantize a normalized amount for a ``DecimalField``."""
    quantum = Decimal(1).scaleb(-places)
    try:
        return Decimal(repr(to_number(value))).quantize(quantum, rounding=ROUND_HALF_UP, context=_QUANTIZE_CONTEXT)
    except InvalidOperation:
        return Decimal(0).quantize(quantum)


def money(value) -> str:
    return f"{to_number(value):,.2f}"


def billed_amount(spend_amount, rate_used) -> float:
    """USD spend converted at the rate recorded with it."""
    return to_number(spend_amount) * to_number(rate_used)


def convert_to_thb(amount, currency: str, rate=None) -> float:
    amount = to_number(amount)
    if (currency or THB) == THB:
        return amount
    return amount * to_number(rate)


def amount_error(value: Decimal, max_digits: int = 14, places: int = 2, allow_zero: bool = False):
    """Why a quantized ``value`` can't go into a ``DecimalField(max_digits, places)``, or ``None``."""
    if value < 0 or (value == 0 and not allow_zero):
        return "Cannot be negative." if allow_zero else "Must be greater than zero."
    if value >= Decimal(10) ** (max_digits - places):
        return "Amount is too large."
    return None
