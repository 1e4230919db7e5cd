from django.urls import path
from . import views

app_name = "ledger"

urlpatterns = [
    path("expenses/", views.expenses, name="expenses"),
    path("income/", views.income, name="income"),
]
