"""Review ORM model — per-user peanut/egg/dairy scores plus moderation status."""

import enum

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, TIMESTAMP, func

from diningreview.config import settings
from diningreview.database import Base


class ReviewStatus(str, enum.Enum):
    """PENDING is the initial state; APPROVED and REJECTED are terminal."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class Review(Base):
    """
    One user's allergy review of one restaurant.

    User and restaurant are referenced by key only, so a review stays
    serialisable on its own. At most one review exists per
    (username, restaurant_id); the lifecycle manager enforces this when a
    review is submitted — there is deliberately no unique constraint here.
    Only approved reviews count towards a restaurant's scores.
    """

    __tablename__ = "reviews"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(
        String(15),
        ForeignKey("users.username"),
        nullable=False,
        index=True,
    )
    restaurant_id = Column(
        Integer,
        ForeignKey("restaurants.id"),
        nullable=False,
        index=True,
    )

    # 1–5 each
    peanut_score = Column(Integer, nullable=False)
    egg_score = Column(Integer, nullable=False)
    dairy_score = Column(Integer, nullable=False)

    comments = Column(String(settings.comments_max_length), nullable=True)

    status = Column(
        Enum(ReviewStatus, native_enum=False, length=16),
        nullable=False,
        default=ReviewStatus.PENDING,
        index=True,
    )
    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
