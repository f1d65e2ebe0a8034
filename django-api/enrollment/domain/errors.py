"""Domain error codes for the enrollment module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    WAIVER_NOT_FOUND = "WAIVER_NOT_FOUND"
    INVALID_ID = "INVALID_ID"
    INVALID_EVENT = "INVALID_EVENT"
    EVENT_IS_DRAFT = "EVENT_IS_DRAFT"
    DEADLINE_PASSED = "DEADLINE_PASSED"
    AT_CAPACITY = "AT_CAPACITY"
    ALREADY_REGISTERED = "ALREADY_REGISTERED"
    NOT_REGISTERED = "NOT_REGISTERED"
    CHILD_NOT_FOUND = "CHILD_NOT_FOUND"
    WAIVER_NOT_APPLICABLE = "WAIVER_NOT_APPLICABLE"
    ALREADY_SIGNED = "ALREADY_SIGNED"
    DUPLICATE_NAME = "DUPLICATE_NAME"
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"
    COLLABORATOR_UNAVAILABLE = "COLLABORATOR_UNAVAILABLE"
    INVALID_PAGINATION = "INVALID_PAGINATION"
    INVALID_DOCUMENT = "INVALID_DOCUMENT"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message="Event not found")


class WaiverNotFoundError(DomainError):
    """Raised when a waiver template id does not resolve in the catalog."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.WAIVER_NOT_FOUND,
            message="Waiver template not found",
        )


class InvalidIdError(DomainError):
    """Raised when an identifier is malformed."""

    def __init__(self, kind: str = "ID") -> None:
        super().__init__(code=ErrorCode.INVALID_ID, message=f"Invalid {kind} format")


class InvalidEventError(DomainError):
    """Raised when event fields violate the event invariants."""

    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_EVENT, message=reason)


class EventIsDraftError(DomainError):
    """Raised when registering for an unpublished event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EVENT_IS_DRAFT,
            message="Event is not open for registration",
        )


class DeadlinePassedError(DomainError):
    """Raised when registering at or after the registration deadline."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DEADLINE_PASSED,
            message="Registration deadline has passed",
        )


class AtCapacityError(DomainError):
    """Raised when every seat is taken."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.AT_CAPACITY, message="Event is full")


class AlreadyRegisteredError(DomainError):
    """Raised when the registrant already holds a record on the event."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_REGISTERED,
            message="Registrant is already registered for this event",
        )


class NotRegisteredError(DomainError):
    """Raised when no record exists for the registrant."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_REGISTERED,
            message="Registrant is not registered for this event",
        )


class ChildNotFoundError(DomainError):
    """Raised when a child id does not belong to the given parent."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.CHILD_NOT_FOUND, message="Child not found")


class WaiverNotApplicableError(DomainError):
    """Raised when signing a waiver the registrant was never asked to sign."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.WAIVER_NOT_APPLICABLE,
            message="Waiver does not apply to this registrant",
        )


class AlreadySignedError(DomainError):
    """Raised when a waiver entry is already signed. Safe to ignore on retries."""

    def __init__(self) -> None:
        super().__init__(code=ErrorCode.ALREADY_SIGNED, message="Waiver already signed")


class DuplicateNameError(DomainError):
    """Raised when an active template already uses the name."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.DUPLICATE_NAME,
            message="An active waiver template with this name already exists",
        )


class ConcurrencyConflictError(DomainError):
    """Raised once the conditional write loop runs out of attempts."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CONCURRENCY_CONFLICT,
            message="Event was modified concurrently, try again",
        )


class CollaboratorUnavailableError(DomainError):
    """Raised when storage, identity or document services fail."""

    def __init__(self, collaborator: str) -> None:
        super().__init__(
            code=ErrorCode.COLLABORATOR_UNAVAILABLE,
            message=f"{collaborator} is unavailable",
        )


class InvalidPaginationError(DomainError):
    """Raised when page or limit is below 1."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PAGINATION,
            message="page and limit must be positive integers",
        )


class InvalidDocumentError(DomainError):
    """Raised when a waiver document name or key is not acceptable."""

    def __init__(self, reason: str) -> None:
        super().__init__(code=ErrorCode.INVALID_DOCUMENT, message=reason)
