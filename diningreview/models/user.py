"""User ORM model — reviewer profile with allergy flags."""

from sqlalchemy import Boolean, Column, String, TIMESTAMP, func

from diningreview.database import Base


class User(Base):
    """
    A reviewer. The username is the immutable key that reviews point at.
    Only location and the three allergy flags change after signup.
    """

    __tablename__ = "users"
    __mapper_args__ = {"eager_defaults": True}

    username = Column(String(15), primary_key=True)

    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zipcode = Column(String(10), nullable=True)

    has_peanut_allergies = Column(Boolean, nullable=False, default=False)
    has_egg_allergies = Column(Boolean, nullable=False, default=False)
    has_dairy_allergies = Column(Boolean, nullable=False, default=False)

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
