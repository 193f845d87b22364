"""
Allergy definitions — single source of truth for every allergy dimension.
Review scoring, aggregation and ranking import exclusively from here.
"""

from __future__ import annotations

import enum

from diningreview.exceptions import UnrecognizedAllergyError

# Inclusive bounds of a single per-allergy review score
SCORE_MIN = 1
SCORE_MAX = 5

# Score reported for a restaurant with no approved reviews
EMPTY_SCORE = 0.0


class AllergyKey(str, enum.Enum):
    """Sort dimension accepted by restaurant search."""

    PEANUT = "peanut"
    EGG = "egg"
    DAIRY = "dairy"
    OVERALL = "overall"

    @classmethod
    def parse(cls, raw: str | AllergyKey) -> AllergyKey:
        """Map a request string to a key; unknown values never reach dispatch."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).lower().strip())
        except ValueError:
            raise UnrecognizedAllergyError(raw) from None


# Per-review score column backing each single-allergy dimension
SCORE_FIELDS: dict[AllergyKey, str] = {
    AllergyKey.PEANUT: "peanut_score",
    AllergyKey.EGG: "egg_score",
    AllergyKey.DAIRY: "dairy_score",
}
