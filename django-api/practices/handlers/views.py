"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging
from datetime import date, datetime
from functools import wraps

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from practices import cache
from practices.domain import OperationScope
from practices.domain.dates import week_start_for
from practices.domain.errors import ConflictDetectedError, DomainError, ErrorCode, ValidationError
from practices.domain.placement import WeekWindow
from practices.handlers.serializers import (
    ConflictSerializer,
    MonthCellSerializer,
    RuleEndDateSerializer,
    SeriesRequestSerializer,
    SessionChangesSerializer,
    SessionSerializer,
    WeekPlacementSerializer,
)
from practices.services.series_builder import SeriesBuilder
from practices.services.session_service import SessionService
from practices.stores.django_store import DjangoSessionStore

logger = logging.getLogger(__name__)

ORGANIZER_HEADER = "X-Organizer-Id"

ERROR_STATUS = {
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.POLICY_CAP_EXCEEDED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.PAST_DATETIME: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SESSION_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RECURRENCE_RULE_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SESSION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.RECURRENCE_RULE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT_DETECTED: status.HTTP_409_CONFLICT,
    ErrorCode.NO_ELIGIBLE_DATES: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCode.PERSISTENCE_ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def session_service() -> SessionService:
    return SessionService(DjangoSessionStore())


def series_builder() -> SeriesBuilder:
    return SeriesBuilder(DjangoSessionStore())


def current_time() -> datetime:
    """Naive local wall-clock time; all session times are naive."""
    now = timezone.now()
    return timezone.localtime(now).replace(tzinfo=None) if settings.USE_TZ else now


def error_response(error: DomainError) -> Response:
    body = {"code": error.code.value, "message": error.message}
    if isinstance(error, ConflictDetectedError):
        body["conflicts"] = ConflictSerializer(error.conflicts, many=True).data
    return Response({"error": body}, status=ERROR_STATUS[error.code])


def invalid_input(errors) -> Response:
    body = {
        "code": ErrorCode.VALIDATION_ERROR.value,
        "message": "Invalid request",
        "fields": errors,
    }
    return Response({"error": body}, status=status.HTTP_400_BAD_REQUEST)


def maps_domain_errors(handler):
    """Turn domain errors raised by a handler into error responses."""

    @wraps(handler)
    def wrapper(self, request, *args, **kwargs):
        try:
            return handler(self, request, *args, **kwargs)
        except DomainError as e:
            if e.code is ErrorCode.PERSISTENCE_ERROR:
                logger.error(f"{request.method} {request.path} failed: {e}")
            return error_response(e)

    return wrapper


def organizer_id(request: Request) -> str:
    value = request.headers.get(ORGANIZER_HEADER, "").strip()
    if not value:
        raise ValidationError(f"{ORGANIZER_HEADER} header is required")
    return value


def query_date(request: Request, name: str, default: date | None = None) -> date | None:
    raw = request.query_params.get(name)
    if not raw:
        return default
    try:
        return date.fromisoformat(raw)
    except ValueError as e:
        raise ValidationError(f"{name} must be an ISO date") from e


def query_int(request: Request, name: str, default: int) -> int:
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValidationError(f"{name} must be an integer") from e


def query_scope(request: Request) -> OperationScope:
    raw = request.query_params.get("scope", OperationScope.SINGLE.value)
    try:
        return OperationScope(raw)
    except ValueError as e:
        raise ValidationError("scope must be one of: single, whole_series") from e


def filters(request: Request) -> dict:
    return {
        "organizer_id": request.query_params.get("organizer") or None,
        "group_label": request.query_params.get("group") or None,
    }


class PracticeListView(APIView):
    """Handler for GET/POST /api/practices"""

    @maps_domain_errors
    def get(self, request: Request) -> Response:
        sessions = session_service().list_sessions(
            date_from=query_date(request, "from"),
            date_to=query_date(request, "to"),
            **filters(request),
        )
        return Response({"results": SessionSerializer(sessions, many=True).data})

    @maps_domain_errors
    def post(self, request: Request) -> Response:
        organizer = organizer_id(request)
        serializer = SeriesRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer.errors)

        result = series_builder().build(serializer.to_domain(organizer), current_time())
        body = {
            "created_count": result.created_count,
            "recurrence_rule_id": (
                str(result.recurrence_rule_id) if result.recurrence_rule_id else None
            ),
            "results": SessionSerializer(result.sessions, many=True).data,
        }
        return Response(body, status=status.HTTP_201_CREATED)


class PracticeDetailView(APIView):
    """Handler for GET/PATCH/DELETE /api/practices/{session_id}"""

    @maps_domain_errors
    def get(self, request: Request, session_id: str) -> Response:
        session = session_service().get_session(session_id)
        return Response(SessionSerializer(session).data)

    @maps_domain_errors
    def patch(self, request: Request, session_id: str) -> Response:
        organizer = organizer_id(request)
        scope = query_scope(request)
        serializer = SessionChangesSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer.errors)

        updated = session_service().update_session(
            session_id, organizer, serializer.to_domain(), scope, current_time()
        )
        return Response({"results": SessionSerializer(updated, many=True).data})

    @maps_domain_errors
    def delete(self, request: Request, session_id: str) -> Response:
        deleted = session_service().delete_session(
            session_id, organizer_id(request), query_scope(request)
        )
        return Response({"deleted_count": deleted})


class RecurrenceRuleView(APIView):
    """Handler for PATCH /api/recurrence-rules/{rule_id}"""

    @maps_domain_errors
    def patch(self, request: Request, rule_id: str) -> Response:
        organizer = organizer_id(request)
        serializer = RuleEndDateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_input(serializer.errors)

        change = session_service().update_rule_end_date(
            rule_id, organizer, serializer.validated_data["end_date"], current_time()
        )
        return Response(
            {
                "added_count": len(change.added),
                "removed_count": change.removed,
                "added": SessionSerializer(change.added, many=True).data,
            }
        )


class MonthCalendarView(APIView):
    """Handler for GET /api/calendar/month"""

    @maps_domain_errors
    def get(self, request: Request) -> Response:
        today = current_time().date()
        year = query_int(request, "year", today.year)
        month = query_int(request, "month", today.month)
        params = filters(request)

        key = cache.calendar_key("month", year=year, month=month, **params)
        body = cache.get_calendar(key)
        if body is None:
            grid = session_service().month_calendar(year, month, **params)
            body = {
                "year": year,
                "month": month,
                "weeks": [MonthCellSerializer(row, many=True).data for row in grid],
            }
            cache.set_calendar(key, body)
        return Response(body)


class WeekCalendarView(APIView):
    """Handler for GET /api/calendar/week"""

    @maps_domain_errors
    def get(self, request: Request) -> Response:
        defaults = settings.PRACTICES
        week_start = week_start_for(query_date(request, "start", current_time().date()))
        try:
            window = WeekWindow(
                start_hour=query_int(request, "start_hour", defaults["WEEK_START_HOUR"]),
                end_hour=query_int(request, "end_hour", defaults["WEEK_END_HOUR"]),
                slot_minutes=query_int(request, "slot_minutes", defaults["WEEK_SLOT_MINUTES"]),
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e
        params = filters(request)

        key = cache.calendar_key(
            "week",
            start=week_start.isoformat(),
            start_hour=window.start_hour,
            end_hour=window.end_hour,
            slot_minutes=window.slot_minutes,
            **params,
        )
        body = cache.get_calendar(key)
        if body is None:
            placements = session_service().week_calendar(week_start, window, **params)
            body = {
                "week_start": week_start.isoformat(),
                "start_hour": window.start_hour,
                "end_hour": window.end_hour,
                "slot_minutes": window.slot_minutes,
                "slot_count": window.slot_count,
                "placements": WeekPlacementSerializer(placements, many=True).data,
            }
            cache.set_calendar(key, body)
        return Response(body)
