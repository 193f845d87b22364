"""Restaurant ORM model."""

from sqlalchemy import Column, Integer, String, TIMESTAMP, func

from diningreview.database import Base


class Restaurant(Base):
    """
    A restaurant that reviews are written against.
    (name, zipcode) is unique — enforced by the registry at creation time.
    Zipcode is the only field search filters on.
    """

    __tablename__ = "restaurants"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)

    street = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zipcode = Column(String(10), nullable=False, index=True)

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )
