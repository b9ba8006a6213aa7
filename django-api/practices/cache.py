"""Calendar response cache.

Keys embed a version counter; bumping the counter invalidates every cached
calendar at once.
"""

from django.conf import settings
from django.core.cache import cache

CALENDAR_VERSION_KEY = "calendar:version"


def calendar_version() -> int:
    return cache.get_or_set(CALENDAR_VERSION_KEY, 1, timeout=None)


def calendar_key(view: str, **params) -> str:
    parts = ":".join(f"{name}={params[name]}" for name in sorted(params))
    return f"calendar:v{calendar_version()}:{view}:{parts}"


def get_calendar(key: str):
    return cache.get(key)


def set_calendar(key: str, payload) -> None:
    cache.set(key, payload, timeout=settings.PRACTICES["CALENDAR_CACHE_TIMEOUT"])


def invalidate_calendars() -> None:
    try:
        cache.incr(CALENDAR_VERSION_KEY)
    except ValueError:
        # Counter expired or never set; any fresh value starts a new generation.
        cache.set(CALENDAR_VERSION_KEY, 2, timeout=None)
