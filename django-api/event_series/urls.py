from django.urls import path

from event_series.handlers import SyncEventSeriesView

urlpatterns = [
    path(
        "cron/sync-event-series",
        SyncEventSeriesView.as_view(),
        name="sync-event-series",
    ),
]
