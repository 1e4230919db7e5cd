from .periods import current_ym, safe_month_window


def month_context(request, active_nav):
    """Shared context for month-scoped pages (month bar + nav highlight)."""
    window = safe_month_window(request.GET.get("month"))
    return window, {
        "active_nav": active_nav,
        "window": window,
        "month": window.ym,
        "current_month": current_ym(),
    }
