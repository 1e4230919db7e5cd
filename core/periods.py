"""
Calendar-month windows.

A period is the half-open range ``[start, end)`` of a ``YYYY-MM`` month. All
windows are computed from UTC dates so invoices and reports agree on where a
month begins.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import date

from django.utils import timezone

YM_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")


@dataclass(frozen=True)
class MonthWindow:
    ym: str
    start: date
    end: date

    @property
    def label(self) -> str:
        return pretty_month(self.ym)

    @property
    def prev_ym(self) -> str:
        return add_months(self.ym, -1)

    @property
    def next_ym(self) -> str:
        return add_months(self.ym, 1)


def current_ym() -> str:
    today = timezone.now().date()
    return f"{today.year:04d}-{today.month:02d}"


def is_valid_ym(ym) -> bool:
    return bool(ym) and YM_RE.match(str(ym)) is not None


def parse_ym(ym: str) -> tuple[int, int]:
    """Split a ``YYYY-MM`` token; raises ``ValueError`` for anything else."""
    m = YM_RE.match(str(ym or ""))
    if not m:
        raise ValueError(f"Invalid month {ym!r}, expected YYYY-MM")
    return int(m.group(1)), int(m.group(2))


def add_months(ym: str, delta: int) -> str:
    y, m = parse_ym(ym)
    idx = y * 12 + (m - 1) + delta
    return f"{idx // 12:04d}-{idx % 12 + 1:02d}"


def month_window(ym: str) -> MonthWindow:
    y, m = parse_ym(ym)
    start = date(y, m, 1)
    end = date(y + 1, 1, 1) if m == 12 else date(y, m + 1, 1)
    return MonthWindow(ym=f"{y:04d}-{m:02d}", start=start, end=end)


def safe_month_window(ym=None) -> MonthWindow:
    """Window for ``ym``, falling back to the current month for missing or bad input."""
    return month_window(ym if is_valid_ym(ym) else current_ym())


def pretty_month(ym: str) -> str:
    y, m = parse_ym(ym)
    return f"{calendar.month_name[m]} {y}"
