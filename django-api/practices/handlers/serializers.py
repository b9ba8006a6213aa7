"""Serializers for API input parsing and domain model responses."""

from rest_framework import serializers

from practices.domain import (
    RecurrenceKind,
    SeriesRequest,
    SessionChanges,
    TimeOfDay,
)

TIME_INPUT_FORMATS = ["%H:%M", "%H:%M:%S"]


class TimeOfDayField(serializers.TimeField):
    """Parses "HH:MM" into a TimeOfDay and renders it back as "HH:MM"."""

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("input_formats", TIME_INPUT_FORMATS)
        super().__init__(**kwargs)

    def to_internal_value(self, value) -> TimeOfDay:
        return TimeOfDay.from_time(super().to_internal_value(value))

    def to_representation(self, value) -> str:
        return str(value)


class SeriesRequestSerializer(serializers.Serializer):
    """Input for creating a single session or a recurring series."""

    group_label = serializers.CharField(max_length=255)
    anchor_date = serializers.DateField()
    start_time = TimeOfDayField()
    end_time = TimeOfDayField()
    location = serializers.CharField(max_length=255)
    capacity = serializers.IntegerField()
    recurrence_kind = serializers.ChoiceField(
        choices=[kind.value for kind in RecurrenceKind],
        default=RecurrenceKind.NONE.value,
    )
    recurrence_end_date = serializers.DateField(required=False, allow_null=True)
    content = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    level = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    conditions = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    fee = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def to_domain(self, organizer_id: str) -> SeriesRequest:
        data = dict(self.validated_data)
        data["recurrence_kind"] = RecurrenceKind(data["recurrence_kind"])
        return SeriesRequest(organizer_id=organizer_id, **data)


class SessionChangesSerializer(serializers.Serializer):
    """Partial edit of a session."""

    event_date = serializers.DateField(required=False)
    start_time = TimeOfDayField(required=False)
    end_time = TimeOfDayField(required=False)
    location = serializers.CharField(required=False, max_length=255)
    capacity = serializers.IntegerField(required=False)
    content = serializers.CharField(required=False, allow_blank=True)
    level = serializers.CharField(required=False, allow_blank=True)
    conditions = serializers.CharField(required=False, allow_blank=True)
    fee = serializers.CharField(required=False, allow_blank=True)

    def to_domain(self) -> SessionChanges:
        return SessionChanges(**self.validated_data)


class RuleEndDateSerializer(serializers.Serializer):
    end_date = serializers.DateField()


class SessionSerializer(serializers.Serializer):
    """Serializer for Session domain model."""

    id = serializers.CharField()
    organizer_id = serializers.CharField()
    group_label = serializers.CharField()
    event_date = serializers.DateField()
    start_time = TimeOfDayField()
    end_time = TimeOfDayField()
    location = serializers.CharField()
    capacity = serializers.IntegerField(source="capacity.value")
    content = serializers.CharField(allow_null=True)
    level = serializers.CharField(allow_null=True)
    conditions = serializers.CharField(allow_null=True)
    fee = serializers.CharField(allow_null=True)
    recurrence_rule_id = serializers.CharField(allow_null=True)


class ConflictSerializer(serializers.Serializer):
    """Serializer for ConflictRecord domain model."""

    event_date = serializers.DateField()
    start_time = TimeOfDayField()
    end_time = TimeOfDayField()
    location = serializers.CharField()
    group_label = serializers.CharField()


class MonthCellSerializer(serializers.Serializer):
    day = serializers.DateField(allow_null=True)
    events = SessionSerializer(many=True)


class WeekPlacementSerializer(serializers.Serializer):
    session = SessionSerializer(source="event")
    day_index = serializers.IntegerField()
    slot_index = serializers.IntegerField()
    duration_slots = serializers.IntegerField()
