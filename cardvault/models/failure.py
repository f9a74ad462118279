"""
Failure Explanation Envelope: Unified Response Classification.

This module defines the response envelope that gameplay endpoints use to
communicate outcomes to the client. Every user-visible failure must be
classified and explained.

Response types:
- Success: Operation completed successfully
- Refusal: A game rule stopped the operation (expected, explainable)
- KnownFailure: System knows why it failed
- UnknownFailure: System does not know why it failed

AUTHORITY BOUNDARY:
All gameplay responses MUST pass through `finalize_response()`.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"

    # Draw economy
    NO_CREDIT = "no_credit"
    INSUFFICIENT_CREDIT = "insufficient_credit"
    COOLDOWN_ACTIVE = "cooldown_active"

    # Upgrade preconditions
    CARD_NOT_OWNED = "card_not_owned"
    MAX_RARITY_REACHED = "max_rarity_reached"
    INSUFFICIENT_COPIES = "insufficient_copies"

    # Catalog misconfiguration
    EMPTY_DRAW_POOL = "empty_draw_pool"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    REFUSAL = "refusal"
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
    Universal response envelope for gameplay endpoints.

    Every response is classified into one of four outcome types,
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


# =============================================================================
# FAILURE AUTHORITY BOUNDARY
# =============================================================================

# Game rule refusals are the expected, common outcomes of play.
REFUSAL_KINDS: frozenset[FailureKind] = frozenset(
    {
        FailureKind.NO_CREDIT,
        FailureKind.INSUFFICIENT_CREDIT,
        FailureKind.COOLDOWN_ACTIVE,
        FailureKind.CARD_NOT_OWNED,
        FailureKind.MAX_RARITY_REACHED,
        FailureKind.INSUFFICIENT_COPIES,
    }
)

STANDARD_SUGGESTIONS: dict[FailureKind, str] = {
    FailureKind.NO_CREDIT: "Claim your daily credits or come back later.",
    FailureKind.INSUFFICIENT_CREDIT: "Claim your daily credits or come back later.",
    FailureKind.COOLDOWN_ACTIVE: "Daily credits can be claimed once every 24 hours.",
    FailureKind.CARD_NOT_OWNED: "Draw this card before trying to upgrade it.",
    FailureKind.MAX_RARITY_REACHED: "This card cannot be upgraded any further.",
    FailureKind.INSUFFICIENT_COPIES: "Draw more copies of this card.",
    FailureKind.EMPTY_DRAW_POOL: "The card catalog is misconfigured. Please report the issue.",
}

UNKNOWN_FAILURE_MESSAGE = "I failed and I don't know why. Try again in a moment."


# Track finalized responses by identity
_finalized_responses: set[int] = set()


def finalize_response(response: ApiResponse[Any]) -> ApiResponse[Any]:
    """
    Finalize a response through the authority boundary.

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


def create_success(data: T) -> ApiResponse[T]:
    """Create a finalized success response."""
    response = ApiResponse[T](outcome=OutcomeType.SUCCESS, data=data)
    return finalize_response(response)


def create_failure(
    kind: FailureKind,
    message: str,
    detail: str | None = None,
) -> ApiResponse[Any]:
    """
    Create a finalized non-success response.

    Game rule kinds become refusals; everything else is a known failure.
    """
    outcome = OutcomeType.REFUSAL if kind in REFUSAL_KINDS else OutcomeType.KNOWN_FAILURE
    response: ApiResponse[Any] = ApiResponse(
        outcome=outcome,
        failure=FailureDetail(
            kind=kind,
            message=message,
            detail=detail,
            suggestion=STANDARD_SUGGESTIONS.get(kind),
        ),
    )
    return finalize_response(response)


def create_unknown_failure(exception: Exception) -> ApiResponse[Any]:
    """
    Create an unknown failure response from an exception.

    The message is fixed and cannot be customized.
    """
    response: ApiResponse[Any] = ApiResponse(
        outcome=OutcomeType.UNKNOWN_FAILURE,
        failure=FailureDetail(
            kind=FailureKind.UNKNOWN,
            message=UNKNOWN_FAILURE_MESSAGE,
            detail=type(exception).__name__,
            suggestion="If this persists, please report the issue.",
        ),
    )
    return finalize_response(response)
