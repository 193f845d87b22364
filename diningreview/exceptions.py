"""
Domain errors raised by the services.

Every error carries a stable human-readable message and a machine-readable
``code``. ``diningreview.main`` maps the three families onto HTTP statuses:

  NotFoundError        → 404
  ConflictError        → 409
  InvalidArgumentError → 400
"""

from __future__ import annotations

from typing import Any


class DiningReviewError(Exception):
    """Base class for all domain errors."""

    status_code: int = 500
    code: str = "DINING_REVIEW_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ── Not found ─────────────────────────────────────────────────────────────────


class NotFoundError(DiningReviewError):
    status_code = 404
    code = "NOT_FOUND"


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"

    def __init__(self, username: str) -> None:
        super().__init__(f"User [{username}] not found.")
        self.username = username


class RestaurantNotFoundError(NotFoundError):
    code = "RESTAURANT_NOT_FOUND"

    def __init__(self, restaurant_id: int) -> None:
        super().__init__(f"Restaurant with ID [{restaurant_id}] not found.")
        self.restaurant_id = restaurant_id


class ReviewNotFoundError(NotFoundError):
    code = "REVIEW_NOT_FOUND"

    def __init__(self, review_id: int) -> None:
        super().__init__(f"Review with ID [{review_id}] not found.")
        self.review_id = review_id


class NoPendingReviewsError(NotFoundError):
    """Raised by the moderation queue when there is nothing to moderate."""

    code = "NO_PENDING_REVIEWS"

    def __init__(self) -> None:
        super().__init__("No reviews found with PENDING status.")


class NoRestaurantsAtZipError(NotFoundError):
    code = "NO_RESTAURANTS_AT_ZIP"

    def __init__(self, zipcode: str, allergy: str) -> None:
        super().__init__(
            f"No restaurants found with zipcode [{zipcode}] and allergy [{allergy}]."
        )
        self.zipcode = zipcode
        self.allergy = allergy


# ── Conflict ──────────────────────────────────────────────────────────────────


class ConflictError(DiningReviewError):
    status_code = 409
    code = "CONFLICT"


class DuplicateReviewError(ConflictError):
    code = "DUPLICATE_REVIEW"

    def __init__(self, username: str, restaurant_name: str) -> None:
        super().__init__(
            f"User [{username}] has already reviewed Restaurant [{restaurant_name}]."
        )
        self.username = username
        self.restaurant_name = restaurant_name


class DuplicateRestaurantError(ConflictError):
    code = "DUPLICATE_RESTAURANT"

    def __init__(self, name: str, zipcode: str) -> None:
        super().__init__(
            f"A restaurant with name [{name}] and zip code [{zipcode}] already exists."
        )
        self.name = name
        self.zipcode = zipcode


class DuplicateUserError(ConflictError):
    code = "DUPLICATE_USER"

    def __init__(self, username: str) -> None:
        super().__init__(f"User with username [{username}] already exists.")
        self.username = username


# ── Invalid argument ──────────────────────────────────────────────────────────


class InvalidArgumentError(DiningReviewError):
    status_code = 400
    code = "INVALID_ARGUMENT"


class UnrecognizedAllergyError(InvalidArgumentError):
    code = "UNRECOGNIZED_ALLERGY"

    def __init__(self, allergy: Any) -> None:
        super().__init__(f"Unrecognized allergy: {allergy}")
        self.allergy = allergy


class InvalidModerationDecisionError(InvalidArgumentError):
    code = "INVALID_MODERATION_DECISION"

    def __init__(self, decision: Any) -> None:
        super().__init__(f"Invalid review action provided: {decision}")
        self.decision = decision


class ScoreOutOfRangeError(InvalidArgumentError):
    code = "SCORE_OUT_OF_RANGE"

    def __init__(self, field: str, value: Any, low: int, high: int) -> None:
        super().__init__(f"Invalid {field}: {value}. Must be {low}-{high}")
        self.field = field
        self.value = value
