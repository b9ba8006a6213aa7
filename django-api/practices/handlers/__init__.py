from practices.handlers.views import (
    MonthCalendarView,
    PracticeDetailView,
    PracticeListView,
    RecurrenceRuleView,
    WeekCalendarView,
)

__all__ = [
    "MonthCalendarView",
    "PracticeDetailView",
    "PracticeListView",
    "RecurrenceRuleView",
    "WeekCalendarView",
]
