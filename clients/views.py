from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db.models import Sum
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse

from core.money import to_number
from core.views import month_context
from invoicing.models import ClientInvoice
from .forms import AdSourceForm, AdSpendForm, ClientForm
from .models import Client
from .services import ad_spend_for_month, create_ad_spend


@login_required
def index(request):
    _, ctx = month_context(request, "clients")
    form = ClientForm(request.POST or None)
    if request.method == "POST" and form.is_valid():
        client = form.save(commit=False)
        client.owner = request.user
        client.save()
        messages.success(request, f"Client {client.name} added.")
        return redirect("clients:index")
    ctx.update({"clients": Client.objects.filter(owner=request.user), "form": form})
    return render(request, "clients/index.html", ctx)


@login_required
def detail(request, pk: int):
    client = get_object_or_404(Client, pk=pk, owner=request.user)
    window, ctx = month_context(request, "clients")
    source_form = AdSourceForm(request.POST or None)
    if request.method == "POST" and source_form.is_valid():
        source = source_form.save(commit=False)
        source.client = client
        source.save()
        messages.success(request, f"Source {source.name} added.")
        return redirect("clients:detail", pk=client.pk)
    spends = ad_spend_for_month(request.user, window, client=client)
    billed = spends.aggregate(total=Sum("billed_amount"))["total"]
    invoices = (
        ClientInvoice.objects.filter(client=client)
        .prefetch_related("payments")
        .order_by("-period_start")[:12]
    )
    ctx.update(
        {
            "client": client,
            "sources": client.sources.all(),
            "source_form": source_form,
            "spends": spends,
            "billed_total": to_number(billed),
            "invoices": invoices,
        }
    )
    return render(request, "clients/detail.html", ctx)


@login_required
def ads(request):
    window, ctx = month_context(request, "ads")
    form = AdSpendForm(request.POST or None, owner=request.user)
    if request.method == "POST" and form.is_valid():
        data = form.cleaned_data
        result = create_ad_spend(
            request.user,
            data["client"].pk,
            data["date"],
            data["spend_amount"],
            data["rate_used"],
            platform=data["platform"],
            source_id=data["source"].pk if data["source"] else None,
            note=data["note"],
        )
        if result.ok:
            messages.success(request, "Ad spend saved.")
            return redirect(f"{reverse('clients:ads')}?month={window.ym}")
        messages.error(request, result.message)
    spends = ad_spend_for_month(request.user, window)
    ctx.update(
        {
            "form": form,
            "spends": spends,
            "billed_total": to_number(spends.aggregate(total=Sum("billed_amount"))["total"]),
        }
    )
    return render(request, "clients/ads.html", ctx)
