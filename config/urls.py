from django.contrib import admin
from django.urls import include, path
from accounts import views as accounts_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("accounts/", include("allauth.urls")),
    path("", accounts_views.home, name="home"),
    # pages
    path("invoices/", include("invoicing.urls")),
    path("training/", include("training.urls")),
    path("reports/", include("reports.urls")),
    # clients, ads, expenses and income live at the top level
    path("", include("clients.urls")),
    path("", include("ledger.urls")),
    # JSON API
    path("api/", include("config.api_urls")),
]
