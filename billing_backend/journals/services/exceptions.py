# journals/services/exceptions.py

"""
JOURNAL SERVICE ERRORS

Centralized domain errors for the journal engine. Every error carries the
objects needed to act on it (facility, order detail, account).
"""


class JournalError(Exception):
    """Base exception for all journal engine failures."""


class AlreadyJournaledError(JournalError):
    """Raised when an order detail already belongs to a journal."""

    def __init__(self, order_detail, message: str | None = None):
        self.order_detail = order_detail
        super().__init__(
            message or f"Order detail #{order_detail} is already journaled"
        )


class FacilityHasPendingJournalError(JournalError):
    """Raised when a facility already has a journal awaiting its import result."""

    def __init__(self, facility):
        self.facility = facility
        super().__init__(f"Facility {facility} already has a pending journal")


class FacilityMismatchError(JournalError):
    """Raised when an order detail does not belong to the facility of a scoped journal."""

    def __init__(self, order_detail, facility):
        self.order_detail = order_detail
        self.facility = facility
        super().__init__(
            f"Order detail #{order_detail} does not belong to facility {facility}"
        )


class InvalidAccountError(JournalError):
    """Raised when the funding account of an order detail cannot be charged."""

    def __init__(self, order_detail, account, reason: str):
        self.order_detail = order_detail
        self.account = account
        self.reason = reason
        super().__init__(
            f"Account {account} on order detail #{order_detail} is invalid. It {reason}."
        )


class RequiredFieldError(JournalError):
    """Raised when a journal field required for creation or closing is missing."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field} is required")


class JournalStateError(JournalError):
    """Raised on a lifecycle transition the journal cannot make."""


class EmptySelectionError(JournalError):
    """Raised when an operation needs at least one order detail."""


class UnfulfilledRecordError(JournalError):
    """Raised when an order detail has no fulfillment date."""

    def __init__(self, order_detail):
        self.order_detail = order_detail
        super().__init__(f"Order detail #{order_detail} has not been fulfilled")


class ExportUnavailableError(JournalError):
    """
    Raised when a journal cannot be exported (no rows, no source file).

    Callers of the export service see a False return value instead.
    """
