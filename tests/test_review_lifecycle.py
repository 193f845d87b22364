from __future__ import annotations

import asyncio

import pytest

from diningreview.exceptions import (
    ConflictError,
    DuplicateReviewError,
    InvalidArgumentError,
    InvalidModerationDecisionError,
    NoPendingReviewsError,
    NotFoundError,
    RestaurantNotFoundError,
    ReviewNotFoundError,
    ScoreOutOfRangeError,
    UserNotFoundError,
)
from diningreview.models import ReviewStatus
from diningreview.services.review_lifecycle import ModerationDecision, ReviewScores


@pytest.fixture
async def alice(users):
    return await users.create_user("alice123", zipcode="10001", has_peanut_allergies=True)


@pytest.fixture
async def bistro(restaurants):
    return await restaurants.create_restaurant("Bistro", "10001", city="New York")


# ── ReviewScores ─────────────────────────────────────────────────────────────


def test_scores_accept_bounds():
    scores = ReviewScores(peanut=1, egg=5, dairy=3)
    assert (scores.peanut, scores.egg, scores.dairy) == (1, 5, 3)


@pytest.mark.parametrize("peanut,egg,dairy,field", [
    (0, 3, 3, "peanut_score"),
    (3, 6, 3, "egg_score"),
    (3, 3, -1, "dairy_score"),
])
def test_scores_out_of_range(peanut, egg, dairy, field):
    with pytest.raises(ScoreOutOfRangeError) as exc_info:
        ReviewScores(peanut, egg, dairy)
    assert exc_info.value.field == field
    assert isinstance(exc_info.value, InvalidArgumentError)


def test_scores_reject_non_integers():
    with pytest.raises(ScoreOutOfRangeError):
        ReviewScores(2.5, 3, 3)
    with pytest.raises(ScoreOutOfRangeError):
        ReviewScores(True, 3, 3)


# ── submit ───────────────────────────────────────────────────────────────────


async def test_submit_creates_pending_review(lifecycle, alice, bistro):
    review = await lifecycle.submit(
        "alice123", bistro.id, ReviewScores(5, 4, 1), comments="Great peanut-free menu"
    )
    assert review.id is not None
    assert review.status == ReviewStatus.PENDING
    assert review.username == "alice123"
    assert review.restaurant_id == bistro.id
    assert (review.peanut_score, review.egg_score, review.dairy_score) == (5, 4, 1)
    assert review.comments == "Great peanut-free menu"


async def test_submit_unknown_user(lifecycle, bistro):
    with pytest.raises(UserNotFoundError) as exc_info:
        await lifecycle.submit("nobody99", bistro.id, ReviewScores(3, 3, 3))
    assert "nobody99" in str(exc_info.value)


async def test_submit_unknown_restaurant(lifecycle, alice):
    with pytest.raises(RestaurantNotFoundError):
        await lifecycle.submit("alice123", 404, ReviewScores(3, 3, 3))


async def test_second_submit_for_same_pair_conflicts(lifecycle, store, alice, bistro):
    await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    with pytest.raises(DuplicateReviewError) as exc_info:
        await lifecycle.submit("alice123", bistro.id, ReviewScores(5, 5, 5))
    assert isinstance(exc_info.value, ConflictError)
    assert "Bistro" in exc_info.value.message
    assert len(store.reviews) == 1


async def test_duplicate_check_ignores_status(lifecycle, store, alice, bistro):
    review = await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    await lifecycle.moderate(review.id, "REJECTED")
    with pytest.raises(DuplicateReviewError):
        await lifecycle.submit("alice123", bistro.id, ReviewScores(4, 4, 4))


async def test_concurrent_submits_create_one_review(lifecycle, store, alice, bistro):
    results = await asyncio.gather(
        *(lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3)) for _ in range(5)),
        return_exceptions=True,
    )
    created = [r for r in results if not isinstance(r, Exception)]
    failed = [r for r in results if isinstance(r, Exception)]
    assert len(created) == 1
    assert len(failed) == 4
    assert all(isinstance(e, DuplicateReviewError) for e in failed)
    assert len(store.reviews) == 1


async def test_same_user_can_review_different_restaurants(lifecycle, restaurants, alice, bistro):
    other = await restaurants.create_restaurant("Diner", "10001")
    await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    review = await lifecycle.submit("alice123", other.id, ReviewScores(3, 3, 3))
    assert review.restaurant_id == other.id


# ── moderate ─────────────────────────────────────────────────────────────────


async def test_moderate_approve(lifecycle, alice, bistro):
    review = await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    moderated = await lifecycle.moderate(review.id, ModerationDecision.APPROVED)
    assert moderated.status == ReviewStatus.APPROVED


async def test_moderate_reject_from_string(lifecycle, alice, bistro):
    review = await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    moderated = await lifecycle.moderate(review.id, "REJECTED")
    assert moderated.status == ReviewStatus.REJECTED


async def test_moderate_twice_later_call_wins(lifecycle, alice, bistro):
    review = await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    await lifecycle.moderate(review.id, "APPROVED")
    again = await lifecycle.moderate(review.id, "REJECTED")
    assert again.status == ReviewStatus.REJECTED
    back = await lifecycle.moderate(review.id, "APPROVED")
    assert back.status == ReviewStatus.APPROVED


async def test_moderate_same_decision_twice(lifecycle, alice, bistro):
    review = await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    await lifecycle.moderate(review.id, "APPROVED")
    again = await lifecycle.moderate(review.id, "APPROVED")
    assert again.status == ReviewStatus.APPROVED


async def test_moderate_unknown_review(lifecycle):
    with pytest.raises(ReviewNotFoundError):
        await lifecycle.moderate(999, "APPROVED")


@pytest.mark.parametrize("decision", ["PENDING", "approve", "MAYBE", ""])
async def test_moderate_invalid_decision(lifecycle, store, alice, bistro, decision):
    review = await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    with pytest.raises(InvalidModerationDecisionError):
        await lifecycle.moderate(review.id, decision)
    assert store.reviews[review.id].status == ReviewStatus.PENDING


async def test_invalid_decision_checked_before_lookup(lifecycle):
    with pytest.raises(InvalidModerationDecisionError):
        await lifecycle.moderate(999, "MAYBE")


# ── listing ──────────────────────────────────────────────────────────────────


async def test_list_pending_empty_is_an_error(lifecycle):
    with pytest.raises(NoPendingReviewsError) as exc_info:
        await lifecycle.list_pending()
    assert isinstance(exc_info.value, NotFoundError)


async def test_list_pending_only_pending(lifecycle, users, alice, bistro):
    await users.create_user("bobby456")
    first = await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    second = await lifecycle.submit("bobby456", bistro.id, ReviewScores(2, 2, 2))
    await lifecycle.moderate(first.id, "APPROVED")

    pending = await lifecycle.list_pending()
    assert [r.id for r in pending] == [second.id]


async def test_list_pending_error_after_all_moderated(lifecycle, alice, bistro):
    review = await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    await lifecycle.moderate(review.id, "REJECTED")
    with pytest.raises(NoPendingReviewsError):
        await lifecycle.list_pending()


async def test_list_approved_empty_is_not_an_error(lifecycle, bistro):
    assert await lifecycle.list_approved(bistro.id) == []


async def test_list_approved_unknown_restaurant(lifecycle):
    with pytest.raises(RestaurantNotFoundError):
        await lifecycle.list_approved(42)


async def test_alice_scenario(lifecycle, aggregator, alice, bistro):
    review = await lifecycle.submit("alice123", bistro.id, ReviewScores(5, 4, 1))
    assert review.status == ReviewStatus.PENDING

    approved = await lifecycle.moderate(review.id, "APPROVED")
    assert approved.status == ReviewStatus.APPROVED

    assert [r.id for r in await lifecycle.list_approved(bistro.id)] == [review.id]
    assert await aggregator.peanut_score(bistro.id) == 5.0


async def test_get_review(lifecycle, alice, bistro):
    review = await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    assert (await lifecycle.get_review(review.id)).id == review.id
    with pytest.raises(ReviewNotFoundError):
        await lifecycle.get_review(review.id + 1)


async def test_failed_submit_rolls_back(lifecycle, store, alice, bistro):
    await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    rollbacks = store.rollbacks
    with pytest.raises(DuplicateReviewError):
        await lifecycle.submit("alice123", bistro.id, ReviewScores(3, 3, 3))
    assert store.rollbacks == rollbacks + 1
