"""
Centralized error handling for the combat tracker.

The combat state machine never raises for expected edge cases. The handler
below is used at the collaborator seams (storage, import/export) where
failures must be logged and turned into a default value instead of
propagating into the in-memory state.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


class ErrorSeverity(Enum):
    """Enumeration of error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class TrackerException(Exception):
    """Base class for the exceptions raised by the combat tracker."""


class PartyNotFoundError(TrackerException):
    """Raised when a character operation targets a party that does not exist."""

    def __init__(self, party_id: int) -> None:
        super().__init__(f"Party with ID {party_id} not found.")
        self.party_id = party_id


class StorageError(TrackerException):
    """Raised by the key-value store when persisted data cannot be read."""


@dataclass
class TrackerError:
    """Represents a handled error with severity, context, and optional exception."""

    message: str
    severity: ErrorSeverity
    context: dict[str, Any]
    exception: Optional[Exception] = None


class ErrorHandler:
    """Centralized error handling for the tracker."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("combat_tracker.errors")
        self.error_history: list[TrackerError] = []

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> None:
        """Record an error and log it according to its severity."""
        error = TrackerError(
            message=message,
            severity=severity,
            context=context or {},
            exception=exception,
        )
        self.error_history.append(error)

        # Prefix context keys to avoid conflicts with logging system reserved keys
        safe_context = {f"ctx_{key}": value for key, value in error.context.items()}

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"CRITICAL: {error.message}", extra=safe_context)
            if error.exception:
                self.logger.critical(
                    "".join(traceback.format_exception(error.exception))
                )
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {error.message}", extra=safe_context)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {error.message}", extra=safe_context)
        else:
            self.logger.info(f"INFO: {error.message}", extra=safe_context)

    def safe_execute(
        self,
        operation: Callable[[], T],
        default: T,
        error_message: str,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        context: Optional[dict[str, Any]] = None,
    ) -> T:
        """
        Execute an operation, returning a default value if it raises.

        Args:
            operation (Callable[[], T]): The operation to execute.
            default (T): The value returned when the operation fails.
            error_message (str): Prefix of the logged error message.
            severity (ErrorSeverity): Severity used to log the failure.
            context (dict[str, Any] | None): Additional logging context.

        Returns:
            T: The operation result, or the default value on failure.

        """
        try:
            return operation()
        except Exception as e:
            self.handle(
                f"{error_message}: {e}",
                severity,
                context,
                e,
            )
            return default

    def clear_history(self) -> None:
        self.error_history.clear()


# Global error handler instance
ERROR_HANDLER = ErrorHandler()
