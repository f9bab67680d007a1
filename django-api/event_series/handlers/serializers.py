"""Serializers for trigger input and materialization results."""

from django.conf import settings
from rest_framework import serializers

MAX_LOOKAHEAD_DAYS = 366


class SyncRequestSerializer(serializers.Serializer):
    """Optional overrides accepted by the sync trigger."""

    lookaheadDays = serializers.IntegerField(
        required=False, min_value=0, max_value=MAX_LOOKAHEAD_DAYS
    )
    seriesIds = serializers.ListField(
        child=serializers.UUIDField(), required=False, allow_empty=True
    )

    def validated_lookahead_days(self) -> int:
        return self.validated_data.get(
            "lookaheadDays", settings.EVENT_SERIES_LOOKAHEAD_DAYS
        )

    def validated_series_ids(self) -> list[str] | None:
        series_ids = self.validated_data.get("seriesIds")
        if not series_ids:
            return None
        return [str(series_id) for series_id in series_ids]


class MaterializeResultSerializer(serializers.Serializer):
    """Serializer for the MaterializeResult domain model."""

    processedSeries = serializers.IntegerField(source="processed_series")
    createdEvents = serializers.IntegerField(source="created_events")
    firstCreatedEventId = serializers.SerializerMethodField()
    skippedSeries = serializers.SerializerMethodField()
    untaggedSeries = serializers.SerializerMethodField()

    def get_firstCreatedEventId(self, result) -> str | None:
        if result.first_created_event_id is None:
            return None
        return str(result.first_created_event_id)

    def get_skippedSeries(self, result) -> list[str]:
        return [str(series_id) for series_id in result.skipped_series]

    def get_untaggedSeries(self, result) -> list[str]:
        return [str(series_id) for series_id in result.untagged_series]
