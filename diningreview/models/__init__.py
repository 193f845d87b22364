"""SQLAlchemy ORM models package."""

from diningreview.database import Base
from diningreview.models.user import User
from diningreview.models.restaurant import Restaurant
from diningreview.models.review import Review, ReviewStatus

__all__ = ["Base", "User", "Restaurant", "Review", "ReviewStatus"]
