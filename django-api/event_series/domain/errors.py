"""Domain error codes for the event_series module."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from event_series.domain.models import MaterializeResult


class ErrorCode(Enum):
    """Domain error codes."""

    UNSUPPORTED_FREQUENCY = "UNSUPPORTED_FREQUENCY"
    INVALID_SERIES_ID = "INVALID_SERIES_ID"
    INVALID_WINDOW = "INVALID_WINDOW"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    MATERIALIZATION_FAILED = "MATERIALIZATION_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class UnsupportedFrequencyError(DomainError):
    """Raised when a series carries a frequency the expander cannot handle."""

    def __init__(self, frequency: object) -> None:
        super().__init__(
            code=ErrorCode.UNSUPPORTED_FREQUENCY,
            message=f"Unsupported recurrence frequency: {frequency!r}",
        )
        self.frequency = frequency


class InvalidSeriesIdError(DomainError):
    """Raised when a series ID is invalid."""

    def __init__(self, value: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_SERIES_ID,
            message="Invalid series ID format",
        )
        self.value = value


class InvalidWindowError(DomainError):
    """Raised when the materialization window cannot be built."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_WINDOW, message=message)


class StoreUnavailableError(DomainError):
    """Raised when active series cannot be loaded from the store."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Event series store is unavailable",
        )


class MaterializationError(DomainError):
    """Raised when a store write fails mid-run.

    ``partial_result`` holds the counts accumulated before the failure.
    """

    def __init__(self, series_id: object, partial_result: "MaterializeResult") -> None:
        super().__init__(
            code=ErrorCode.MATERIALIZATION_FAILED,
            message="Materialization failed",
        )
        self.series_id = series_id
        self.partial_result = partial_result
