from django.urls import path

from practices.handlers import (
    MonthCalendarView,
    PracticeDetailView,
    PracticeListView,
    RecurrenceRuleView,
    WeekCalendarView,
)

urlpatterns = [
    path("practices", PracticeListView.as_view(), name="practice-list"),
    path("practices/<str:session_id>", PracticeDetailView.as_view(), name="practice-detail"),
    path(
        "recurrence-rules/<str:rule_id>",
        RecurrenceRuleView.as_view(),
        name="recurrence-rule-detail",
    ),
    path("calendar/month", MonthCalendarView.as_view(), name="calendar-month"),
    path("calendar/week", WeekCalendarView.as_view(), name="calendar-week"),
]
