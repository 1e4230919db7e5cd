from django.urls import path
from . import views

app_name = "clients"

urlpatterns = [
    path("clients/", views.index, name="index"),
    path("clients/<int:pk>/", views.detail, name="detail"),
    path("ads/", views.ads, name="ads"),
]
