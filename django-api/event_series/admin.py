from datetime import datetime

from django.conf import settings
from django.contrib import admin, messages

from event_series.domain import SeriesId
from event_series.domain.errors import DomainError
from event_series.models import Category, Event, EventCategory, EventSeries
from event_series.services.materializer import EventSeriesMaterializer
from event_series.stores.django_store import DjangoEventSeriesStore


class EventCategoryInline(admin.TabularInline):
    model = EventCategory
    extra = 0


class EventInline(admin.TabularInline):
    model = Event
    fields = ["title", "start_at", "end_at", "visibility"]
    readonly_fields = ["title", "start_at", "end_at", "visibility"]
    extra = 0
    can_delete = False
    show_change_link = True


@admin.register(EventSeries)
class EventSeriesAdmin(admin.ModelAdmin):
    list_display = ["title", "frequency", "interval", "start_at", "until_date", "is_active", "last_generated_at"]
    list_filter = ["frequency", "is_active", "visibility"]
    search_fields = ["title", "city"]
    readonly_fields = ["last_generated_at", "created_at", "updated_at"]
    inlines = [EventInline]
    actions = ["materialize_now"]

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        # New series get their first window of events right away.
        if not change:
            self._materialize(request, [SeriesId(value=obj.id)])

    @admin.action(description="Materialize selected series now")
    def materialize_now(self, request, queryset):
        series_ids = [SeriesId(value=series_id) for series_id in queryset.values_list("id", flat=True)]
        self._materialize(request, series_ids)

    def _materialize(self, request, series_ids):
        materializer = EventSeriesMaterializer(DjangoEventSeriesStore())
        try:
            result = materializer.materialize(
                now=datetime.now(),
                lookahead_days=settings.EVENT_SERIES_LOOKAHEAD_DAYS,
                series_ids=series_ids,
            )
        except DomainError as exc:
            self.message_user(request, f"Materialization failed: {exc}", level=messages.ERROR)
            return
        self.message_user(
            request,
            f"Processed {result.processed_series} series, created {result.created_events} events.",
            level=messages.SUCCESS,
        )


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ["title", "start_at", "end_at", "series", "visibility"]
    list_filter = ["visibility", "series"]
    search_fields = ["title", "city"]
    inlines = [EventCategoryInline]


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ["key", "label", "sort_order", "is_active"]
    list_filter = ["is_active"]
