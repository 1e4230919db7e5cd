from django.contrib import admin
from .models import AdSource, AdSpend, Client

class AdSourceInline(admin.TabularInline):
    model = AdSource
    extra = 0

@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "owner", "fee_type", "fee_percent", "fixed_monthly_thb", "invoice_currency")
    list_filter = ("fee_type", "invoice_currency")
    search_fields = ("name", "owner__email")
    inlines = [AdSourceInline]

@admin.register(AdSpend)
class AdSpendAdmin(admin.ModelAdmin):
    list_display = ("date", "client", "platform", "spend_amount", "rate_used", "billed_amount")
    list_filter = ("platform",)
    search_fields = ("client__name", "note")
    date_hierarchy = "date"
    readonly_fields = ("billed_amount",)

@admin.register(AdSource)
class AdSourceAdmin(admin.ModelAdmin):
    list_display = ("name", "type", "client")
    search_fields = ("name", "client__name")
