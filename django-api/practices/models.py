"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class RecurrenceRule(models.Model):
    """Persistence model for recurrence rules."""

    class Kind(models.TextChoices):
        WEEKLY = "weekly", "Weekly"
        MONTHLY_FIXED_DATE = "monthly_fixed_date", "Monthly on a fixed date"
        MONTHLY_NTH_WEEKDAY = "monthly_nth_weekday", "Monthly on the nth weekday"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organizer_id = models.CharField(max_length=255)
    kind = models.CharField(max_length=32, choices=Kind.choices)
    day_of_week = models.PositiveSmallIntegerField(blank=True, null=True)
    nth_week = models.PositiveSmallIntegerField(blank=True, null=True)
    anchor_date = models.DateField()
    end_date = models.DateField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["end_date"], name="practices_r_end_dat_5c1d2e_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(day_of_week__isnull=True) | models.Q(day_of_week__lte=6),
                name="recurrence_rule_day_of_week_range",
            ),
            models.CheckConstraint(
                condition=models.Q(nth_week__isnull=True)
                | models.Q(nth_week__gte=1, nth_week__lte=5),
                name="recurrence_rule_nth_week_range",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.kind} until {self.end_date}"


class PracticeSession(models.Model):
    """Persistence model for practice sessions."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    organizer_id = models.CharField(max_length=255)
    group_label = models.CharField(max_length=255)
    event_date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    location = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField()
    content = models.TextField(blank=True, null=True)
    level = models.CharField(max_length=255, blank=True, null=True)
    conditions = models.TextField(blank=True, null=True)
    fee = models.CharField(max_length=255, blank=True, null=True)
    recurrence_rule = models.ForeignKey(
        RecurrenceRule,
        on_delete=models.SET_NULL,
        blank=True,
        null=True,
        related_name="sessions",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["event_date", "start_time"]
        indexes = [
            models.Index(
                fields=["organizer_id", "group_label", "event_date"],
                name="practices_p_organiz_8a4f1b_idx",
            ),
            models.Index(
                fields=["recurrence_rule", "event_date"],
                name="practices_p_recurre_3e7c90_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_time__lt=models.F("end_time")),
                name="practice_session_starts_before_end",
            ),
            models.CheckConstraint(
                condition=models.Q(capacity__gte=1),
                name="practice_session_capacity_positive",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.group_label} - {self.event_date} {self.start_time:%H:%M}"
