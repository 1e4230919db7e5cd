import logging
from urllib.parse import urlparse

from allauth.account.models import EmailAddress
from allauth.account.signals import user_logged_in
from django.conf import settings
from django.contrib.sites.models import Site
from django.db import DatabaseError
from django.db.models.signals import post_migrate
from django.dispatch import receiver

logger = logging.getLogger(__name__)


@receiver(user_logged_in)
def on_user_logged_in(sender, request, user, **kwargs):
    # Local dev has no mail delivery; treat the login address as verified.
    site = getattr(settings, "SITE_URL", "")
    if site.startswith("http://localhost:8000"):
        EmailAddress.objects.update_or_create(
            user=user,
            email=user.email,
            defaults={"verified": True, "primary": True},
        )
        EmailAddress.objects.filter(user=user).exclude(
            email=user.email
        ).update(primary=False)


@receiver(post_migrate)
def sync_site_domain(sender, **kwargs):
    site_url = getattr(settings, "SITE_URL", "")
    if not site_url:
        return
    host = urlparse(site_url).hostname or "example.com"
    sid = getattr(settings, "SITE_ID", 1)
    try:
        Site.objects.update_or_create(id=sid, defaults={"domain": host, "name": "WealthFlow"})
    except DatabaseError:
        # Best-effort, don't block migrations
        logger.warning("Could not sync Site %s to %s", sid, host, exc_info=True)
