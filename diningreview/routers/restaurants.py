"""
Restaurant endpoints.

  POST /restaurants                              — register a restaurant
  GET  /restaurants/search?zipcode=&allergy=     — ranked search
  GET  /restaurants/{restaurant_id}              — lookup
  GET  /restaurants/{restaurant_id}/scores       — aggregated allergy scores
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, status

from diningreview.dependencies import (
    get_aggregator,
    get_ranker,
    get_restaurant_service,
)
from diningreview.schemas.restaurant import (
    RestaurantCreate,
    RestaurantRead,
    RestaurantScores,
)
from diningreview.services.restaurant_ranker import RestaurantRanker
from diningreview.services.restaurant_service import RestaurantService
from diningreview.services.score_aggregator import ScoreAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.post("", response_model=RestaurantRead, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    body: RestaurantCreate,
    restaurants: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantRead:
    """Register a restaurant. 409 if one with the same name and zipcode exists."""
    restaurant = await restaurants.create_restaurant(**body.model_dump())
    return RestaurantRead.model_validate(restaurant)


# Declared before /{restaurant_id} so "search" is not read as an id
@router.get("/search", response_model=list[RestaurantRead])
async def search(
    zipcode: str = Query(..., min_length=1),
    allergy: str = Query(..., description="peanut | egg | dairy | overall"),
    ranker: RestaurantRanker = Depends(get_ranker),
) -> list[RestaurantRead]:
    """
    Restaurants at zipcode, best score for the chosen allergy first.
    404 when nothing is at the zipcode, 400 for an unknown allergy.
    """
    ranked = await ranker.search_by_zip_and_allergy(zipcode, allergy)
    return [RestaurantRead.model_validate(r) for r in ranked]


@router.get("/{restaurant_id}", response_model=RestaurantRead)
async def get_restaurant(
    restaurant_id: int,
    restaurants: RestaurantService = Depends(get_restaurant_service),
) -> RestaurantRead:
    return RestaurantRead.model_validate(
        await restaurants.get_restaurant(restaurant_id)
    )


@router.get("/{restaurant_id}/scores", response_model=RestaurantScores)
async def get_scores(
    restaurant_id: int,
    aggregator: ScoreAggregator = Depends(get_aggregator),
) -> RestaurantScores:
    """Always computed fresh from the approved reviews."""
    return await aggregator.scores(restaurant_id)
