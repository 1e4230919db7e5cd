from django.contrib import admin
from .models import Expense, Income

@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ("date", "category", "description", "amount_thb", "method", "owner")
    list_filter = ("category",)
    search_fields = ("category", "description")
    date_hierarchy = "date"

@admin.register(Income)
class IncomeAdmin(admin.ModelAdmin):
    list_display = ("date", "type", "currency", "amount", "exchange_rate", "amount_thb", "owner")
    list_filter = ("currency", "type")
    search_fields = ("type", "description")
    date_hierarchy = "date"
    readonly_fields = ("amount_thb",)
