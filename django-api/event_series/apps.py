from django.apps import AppConfig


class EventSeriesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "event_series"
    verbose_name = "Event series"
