"""Django signals for calendar cache invalidation."""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from practices.cache import invalidate_calendars
from practices.models import PracticeSession, RecurrenceRule


@receiver([post_save, post_delete], sender=PracticeSession)
def invalidate_session_cache(sender, instance, **kwargs):
    """Invalidate calendars when a session is saved or deleted."""
    invalidate_calendars()


@receiver([post_save, post_delete], sender=RecurrenceRule)
def invalidate_rule_cache(sender, instance, **kwargs):
    """Invalidate calendars when a recurrence rule is saved or deleted."""
    invalidate_calendars()
