from django.contrib import admin

from practices.models import PracticeSession, RecurrenceRule


class PracticeSessionInline(admin.TabularInline):
    model = PracticeSession
    extra = 0
    fields = ["event_date", "start_time", "end_time", "location", "capacity"]


@admin.register(RecurrenceRule)
class RecurrenceRuleAdmin(admin.ModelAdmin):
    list_display = ["kind", "organizer_id", "anchor_date", "end_date"]
    list_filter = ["kind"]
    inlines = [PracticeSessionInline]


@admin.register(PracticeSession)
class PracticeSessionAdmin(admin.ModelAdmin):
    list_display = ["group_label", "event_date", "start_time", "end_time", "location", "capacity"]
    list_filter = ["group_label", "event_date"]
    search_fields = ["group_label", "location", "organizer_id"]
