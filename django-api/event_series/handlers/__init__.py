from event_series.handlers.views import SyncEventSeriesView

__all__ = ["SyncEventSeriesView"]
