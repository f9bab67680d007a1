"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import hmac
import logging
from datetime import datetime

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import BasePermission
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from event_series.domain.errors import DomainError, InvalidSeriesIdError, MaterializationError
from event_series.handlers.serializers import MaterializeResultSerializer, SyncRequestSerializer
from event_series.services.materializer import EventSeriesMaterializer, parse_series_ids
from event_series.stores.django_store import DjangoEventSeriesStore

logger = logging.getLogger(__name__)


class _Unauthorized(Exception):
    """Raised when the trigger secret does not match."""


class HasCronSecret(BasePermission):
    """Bearer-token check against EVENT_SERIES_CRON_SECRET.

    With no secret configured every caller is let through (local use only).
    """

    def has_permission(self, request: Request, view: APIView) -> bool:
        secret = settings.EVENT_SERIES_CRON_SECRET
        if not secret:
            return True
        header = request.headers.get("Authorization", "")
        return hmac.compare_digest(header.encode(), f"Bearer {secret}".encode())


class SyncEventSeriesView(APIView):
    """Handler for GET|POST /api/cron/sync-event-series"""

    authentication_classes: list = []
    permission_classes = [HasCronSecret]

    def permission_denied(self, request: Request, message=None, code=None):
        # Respond 401 without a WWW-Authenticate challenge.
        raise _Unauthorized()

    def handle_exception(self, exc: Exception) -> Response:
        if isinstance(exc, _Unauthorized):
            return Response({"error": "Unauthorized"}, status=status.HTTP_401_UNAUTHORIZED)
        return super().handle_exception(exc)

    def get(self, request: Request) -> Response:
        return self._run_sync(request.query_params)

    def post(self, request: Request) -> Response:
        return self._run_sync(request.data or request.query_params)

    def _run_sync(self, data) -> Response:
        serializer = SyncRequestSerializer(data=data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        materializer = EventSeriesMaterializer(DjangoEventSeriesStore())
        try:
            series_ids = serializer.validated_series_ids()
            result = materializer.materialize(
                now=datetime.now(),
                lookahead_days=serializer.validated_lookahead_days(),
                series_ids=parse_series_ids(series_ids) if series_ids else None,
            )
        except InvalidSeriesIdError as exc:
            return Response({"error": exc.message}, status=status.HTTP_400_BAD_REQUEST)
        except MaterializationError as exc:
            logger.error("Event series sync failed: %s", exc)
            payload = MaterializeResultSerializer(exc.partial_result).data
            return Response(
                {"error": "Event series sync failed", **payload},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        except DomainError as exc:
            logger.error("Event series sync failed: %s", exc)
            return Response(
                {"error": "Event series sync failed"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(
            {
                "ok": True,
                **MaterializeResultSerializer(result).data,
                "ranAt": datetime.now().isoformat(),
            }
        )
