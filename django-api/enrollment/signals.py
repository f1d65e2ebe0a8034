"""Django signals for cache invalidation."""

from django.core.cache import cache
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from enrollment.models import WaiverTemplate

WAIVER_LIST_CACHE_KEY = "waivers:list"
WAIVER_LIST_ALL_CACHE_KEY = "waivers:list:all"


def waiver_list_cache_key(include_archived: bool) -> str:
    return WAIVER_LIST_ALL_CACHE_KEY if include_archived else WAIVER_LIST_CACHE_KEY


def _clear_waiver_lists() -> None:
    cache.delete_many([WAIVER_LIST_CACHE_KEY, WAIVER_LIST_ALL_CACHE_KEY])


@receiver([post_save, post_delete], sender=WaiverTemplate)
def invalidate_waiver_list_cache(sender, instance, **kwargs):
    """Invalidate cached catalog listings once the template change commits."""
    transaction.on_commit(_clear_waiver_lists)
