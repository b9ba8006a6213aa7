"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

from datetime import date, time

import pytest
from django.core.cache import cache

from practices.cache import (
    CALENDAR_VERSION_KEY,
    calendar_key,
    calendar_version,
    get_calendar,
    invalidate_calendars,
    set_calendar,
)
from practices.models import PracticeSession, RecurrenceRule


def _row(**overrides) -> PracticeSession:
    fields = {
        "organizer_id": "organizer-1",
        "group_label": "Tigers",
        "event_date": date(2024, 3, 4),
        "start_time": time(18, 0),
        "end_time": time(20, 0),
        "location": "Main Gym",
        "capacity": 12,
    }
    fields.update(overrides)
    return PracticeSession(**fields)


class TestCalendarKeys:
    """Tests for versioned calendar keys."""

    def test_key_is_independent_of_param_order(self):
        assert calendar_key("month", year=2024, month=3) == calendar_key("month", month=3, year=2024)

    def test_invalidate_bumps_version(self):
        before = calendar_version()
        invalidate_calendars()
        assert calendar_version() == before + 1

    def test_invalidate_recovers_missing_counter(self):
        """A missing counter is restarted past the initial generation."""
        cache.delete(CALENDAR_VERSION_KEY)
        invalidate_calendars()
        assert calendar_version() == 2

    def test_old_key_misses_after_invalidation(self):
        key = calendar_key("month", year=2024, month=3)
        set_calendar(key, {"weeks": []})
        assert get_calendar(key) == {"weeks": []}

        invalidate_calendars()

        assert calendar_key("month", year=2024, month=3) != key


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_session_save_invalidates_calendars(self):
        """Saving a session bumps the calendar version."""
        before = calendar_version()
        _row().save()
        assert calendar_version() > before

    def test_session_delete_invalidates_calendars(self):
        """Deleting a session bumps the calendar version."""
        row = _row()
        row.save()
        before = calendar_version()
        row.delete()
        assert calendar_version() > before

    def test_queryset_delete_invalidates_calendars(self):
        """Bulk deletes through a queryset still reach the receivers."""
        _row().save()
        before = calendar_version()
        PracticeSession.objects.filter(group_label="Tigers").delete()
        assert calendar_version() > before

    def test_rule_save_invalidates_calendars(self):
        """Saving a recurrence rule bumps the calendar version."""
        before = calendar_version()
        RecurrenceRule.objects.create(
            organizer_id="organizer-1",
            kind=RecurrenceRule.Kind.WEEKLY,
            day_of_week=0,
            anchor_date=date(2024, 3, 4),
            end_date=date(2024, 4, 1),
        )
        assert calendar_version() > before
