from django.contrib import admin
from django.db import transaction
from .models import ClientInvoice, ClientPayment
from .services import recompute_status

class ClientPaymentInline(admin.TabularInline):
    model = ClientPayment
    extra = 0
    can_delete = False
    readonly_fields = ("created_at",)

    def has_change_permission(self, request, obj=None):
        return False

@admin.register(ClientInvoice)
class ClientInvoiceAdmin(admin.ModelAdmin):
    list_display = ("id", "client", "period_start", "spend_thb", "manage_fee_thb", "fixed_fee_thb", "total_thb", "status")
    list_filter = ("status", "period_start")
    search_fields = ("client__name",)
    readonly_fields = ("spend_thb", "manage_fee_thb", "fixed_fee_thb", "total_thb", "status", "created_at", "updated_at")
    inlines = [ClientPaymentInline]
    actions = ["recompute_selected"]

    @admin.action(description="Recompute status from payments")
    def recompute_selected(self, request, queryset):
        for invoice in queryset:
            recompute_status(invoice)
        self.message_user(request, f"Recomputed {queryset.count()} invoice(s).")

    def save_related(self, request, form, formsets, change):
        with transaction.atomic():
            super().save_related(request, form, formsets, change)
            recompute_status(form.instance)

@admin.register(ClientPayment)
class ClientPaymentAdmin(admin.ModelAdmin):
    """Payments are append-only: staff may add one, never edit or delete it."""

    list_display = ("invoice", "date", "amount_thb", "method")
    search_fields = ("invoice__client__name", "note")

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def save_model(self, request, obj, form, change):
        with transaction.atomic():
            super().save_model(request, obj, form, change)
            recompute_status(obj.invoice)
