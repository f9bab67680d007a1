"""Materialize upcoming events from active series.

Meant to be run by cron, e.g. ``python manage.py materialize_event_series``.
"""

import json
from datetime import datetime

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from event_series.domain.errors import DomainError, MaterializationError
from event_series.handlers.serializers import MAX_LOOKAHEAD_DAYS, MaterializeResultSerializer
from event_series.services.materializer import EventSeriesMaterializer, parse_series_ids
from event_series.stores.django_store import DjangoEventSeriesStore


class Command(BaseCommand):
    help = "Materialize events for active event series over the lookahead window."

    def add_arguments(self, parser):
        parser.add_argument(
            "--lookahead-days",
            type=int,
            default=None,
            help="Days ahead of now to materialize (default: EVENT_SERIES_LOOKAHEAD_DAYS).",
        )
        parser.add_argument(
            "--series",
            nargs="+",
            default=None,
            metavar="SERIES_ID",
            help="Only materialize these series.",
        )

    def handle(self, *args, **options):
        lookahead_days = options["lookahead_days"]
        if lookahead_days is None:
            lookahead_days = settings.EVENT_SERIES_LOOKAHEAD_DAYS
        if not 0 <= lookahead_days <= MAX_LOOKAHEAD_DAYS:
            raise CommandError(f"--lookahead-days must be between 0 and {MAX_LOOKAHEAD_DAYS}.")

        materializer = EventSeriesMaterializer(DjangoEventSeriesStore())
        try:
            series_ids = parse_series_ids(options["series"]) if options["series"] else None
            result = materializer.materialize(
                now=datetime.now(),
                lookahead_days=lookahead_days,
                series_ids=series_ids,
            )
        except MaterializationError as exc:
            partial = json.dumps(MaterializeResultSerializer(exc.partial_result).data)
            raise CommandError(f"{exc} (partial result: {partial})") from exc
        except DomainError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(json.dumps(MaterializeResultSerializer(result).data))
