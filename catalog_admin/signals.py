import logging

from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from .models import NavbarCategory, Category, SubCategory, Product, Contact, DashboardSnapshot

logger = logging.getLogger(__name__)

_CATALOG_MODELS = (NavbarCategory, Category, SubCategory, Product)


def log_catalog_change(label, instance, action):
    logger.info("%s '%s' (id=%s, slug=%s) was %s.", label, instance.name, instance.pk, instance.slug, action)


# ==== SIGNALS ====
@receiver(post_save)
def catalog_saved(sender, instance, created, **kwargs):
    if sender not in _CATALOG_MODELS:
        return
    log_catalog_change(sender._meta.verbose_name.title(), instance, "created" if created else "updated")


@receiver(post_delete)
def catalog_deleted(sender, instance, **kwargs):
    if sender not in _CATALOG_MODELS:
        return
    log_catalog_change(sender._meta.verbose_name.title(), instance, "deleted")


@receiver(post_save, sender=Contact)
def contact_received(sender, instance, created, **kwargs):
    if created:
        logger.info(
            "New contact #%s from %s about %s (priority %s).",
            instance.pk, instance.email, instance.service, instance.priority,
        )


@receiver(post_save, sender=DashboardSnapshot)
def snapshot_created(sender, instance, created, **kwargs):
    if created:
        logger.info("Dashboard snapshot (%s) was created by %s.", instance.snapshot_type, instance.created_by)
