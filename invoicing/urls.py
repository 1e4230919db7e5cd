from django.urls import path
from . import views

app_name = "invoicing"

urlpatterns = [
    path("", views.index, name="index"),
    path("generate/", views.generate, name="generate"),
    path("<int:invoice_id>/payments/", views.add_payment, name="add_payment"),
]
