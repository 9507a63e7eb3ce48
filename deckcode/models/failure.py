"""
Failure Envelope and Deck Code Error Taxonomy.

Every response leaving the HTTP layer is classified into one of three
outcomes:

- Success: Operation completed successfully
- KnownFailure: System knows why it failed (bad code, unencodable deck)
- UnknownFailure: System does not know why it failed

Codec failures are raised as DeckCodeError, tagged with a DeckCodeErrorKind:

- validation: malformed input detected before any interpretation
- generation: valid logical input that cannot be represented in the format
- decode: inconsistency surfaced while unpacking (last-resort catch-all)
- copy: output transport failure (owned by the presentation layer)

AUTHORITY BOUNDARY:
All user-visible responses MUST pass through `finalize_response()`.
"""

from collections.abc import Sequence
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Codec failures
    ENCODE_FAILED = "encode_failed"
    DECODE_FAILED = "decode_failed"

    # Catalog failures
    CATALOG_UNAVAILABLE = "catalog_unavailable"

    # Service failures
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Universal response envelope for all API endpoints.

    Every response is classified into one of the outcome types,
    ensuring no failure reaches the user unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Response data (present on success)",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create a known failure response.

        Use when the system knows exactly why the operation failed.
        Example: deck code without the KCG- prefix.
        """
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def unknown_failure(
        cls,
        detail: str | None = None,
    ) -> "ApiResponse[Any]":
        """
        Create an unknown failure response.

        NOTE: Prefer create_unknown_failure() which auto-finalizes.
        """
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message=STANDARD_MESSAGES[OutcomeType.UNKNOWN_FAILURE],
                detail=detail,
                suggestion=STANDARD_SUGGESTIONS[OutcomeType.UNKNOWN_FAILURE],
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


# =============================================================================
# DECK CODE ERRORS
# =============================================================================


class DeckCodeErrorKind(str, Enum):
    """Where in the deck code lifecycle a failure happened."""

    VALIDATION = "validation"
    GENERATION = "generation"
    DECODE = "decode"
    COPY = "copy"


_FAILURE_KIND_BY_ERROR_KIND: dict[DeckCodeErrorKind, FailureKind] = {
    DeckCodeErrorKind.VALIDATION: FailureKind.INVALID_INPUT,
    DeckCodeErrorKind.GENERATION: FailureKind.ENCODE_FAILED,
    DeckCodeErrorKind.DECODE: FailureKind.DECODE_FAILED,
    DeckCodeErrorKind.COPY: FailureKind.SERVICE_UNAVAILABLE,
}

_SUGGESTION_BY_ERROR_KIND: dict[DeckCodeErrorKind, str] = {
    DeckCodeErrorKind.VALIDATION: "Check that the deck code was copied completely.",
    DeckCodeErrorKind.GENERATION: "Remove the listed card or reduce its copies to at most 4.",
    DeckCodeErrorKind.DECODE: "Check that the card IDs in the deck code are correct.",
    DeckCodeErrorKind.COPY: "Copy the deck code manually.",
}


class DeckCodeError(KnownError):
    """
    A deck code could not be generated, validated, or decoded.

    Attributes:
        error_kind: Lifecycle stage that failed
        invalid_id: Card ID that could not be represented (generation)
        missing_ids: Card IDs absent from the catalog (decode)
    """

    def __init__(
        self,
        error_kind: DeckCodeErrorKind,
        message: str,
        invalid_id: str | None = None,
        missing_ids: Sequence[str] = (),
    ):
        self.error_kind = error_kind
        self.invalid_id = invalid_id
        self.missing_ids = tuple(missing_ids)

        detail = None
        if invalid_id is not None:
            detail = f"Card ID: {invalid_id}"
        elif self.missing_ids:
            detail = f"Missing card IDs: {', '.join(self.missing_ids)}"

        super().__init__(
            kind=_FAILURE_KIND_BY_ERROR_KIND[error_kind],
            message=message,
            detail=detail,
            suggestion=_SUGGESTION_BY_ERROR_KIND[error_kind],
            status_code=400 if error_kind is DeckCodeErrorKind.VALIDATION else 422,
        )


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================
#
# All user-visible responses MUST pass through this boundary.
#
# =============================================================================


# Standard messages: fixed, boring, predictable

STANDARD_MESSAGES: dict[OutcomeType, str] = {
    OutcomeType.UNKNOWN_FAILURE: (
        "I failed and I don't know why. Try simplifying the request or retrying."
    ),
}

STANDARD_SUGGESTIONS: dict[OutcomeType, str] = {
    OutcomeType.UNKNOWN_FAILURE: "If this persists, please report the issue.",
}


# Track finalized responses by id()
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

    Every response that passes through this function is guaranteed to:
    1. Have a valid outcome classification
    2. Have failure details if not successful

    Raises:
        ValueError: If response structure is invalid
    """
    if response.outcome == OutcomeType.SUCCESS:
        if response.failure is not None:
            raise ValueError("Success response must not have failure details")
    else:
        if response.failure is None:
            raise ValueError(f"{response.outcome.value} response must have failure details")

    _finalized_responses.add(id(response))

    return response


def is_finalized(response: ApiResponse[Any]) -> bool:
    """Check if a response has passed through the authority boundary."""
    return id(response) in _finalized_responses


def create_unknown_failure(
    exception: Exception,
    include_type: bool = True,
) -> ApiResponse[Any]:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized.

    Args:
        exception: The exception that caused the failure
        include_type: Whether to include exception type in detail

    Returns:
        A finalized unknown failure response
    """
    detail = None
    if include_type:
        detail = f"{type(exception).__name__}"

    response: ApiResponse[Any] = ApiResponse.unknown_failure(detail=detail)
    return finalize_response(response)


def create_known_failure(error: KnownError) -> ApiResponse[Any]:
    """
    Create a finalized known failure response from a KnownError.

    Args:
        error: The classified error

    Returns:
        A finalized known failure response
    """
    return finalize_response(error.to_response())


def create_success(data: T) -> ApiResponse[T]:
    """
    Create a success response.

    Args:
        data: The response data

    Returns:
        A finalized success response
    """
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)
