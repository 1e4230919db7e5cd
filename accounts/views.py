from urllib.parse import urlencode

from django.shortcuts import redirect
from django.urls import reverse


def home(request):
    if request.user.is_authenticated:
        url = reverse("reports:dashboard")
        month = request.GET.get("month")
        if month:
            url = f"{url}?{urlencode({'month': month})}"
        return redirect(url)
    return redirect("account_login")
