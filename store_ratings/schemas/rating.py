"""Rating Schemas — submit and update payloads.

Invariants:
    - rating is a strict integer in 1..5 (true/3.0/"3" rejected with 400)
    - store_id is a positive integer
"""

from pydantic import BaseModel, Field

from store_ratings.core.domain_types import MAX_RATING, MIN_RATING


class RatingSubmitRequest(BaseModel):
    store_id: int = Field(gt=0, strict=True)
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING, strict=True)


class RatingUpdateRequest(BaseModel):
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING, strict=True)
