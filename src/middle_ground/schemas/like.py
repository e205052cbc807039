"""Like-related Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from middle_ground.services.aggregator import LikeDistribution


class LikeCounts(BaseModel):
    """Like counts for each of the seven leaning codes; never omits a code."""

    FL: int = 0
    L: int = 0
    SL: int = 0
    M: int = 0
    SR: int = 0
    R: int = 0
    FR: int = 0

    @classmethod
    def from_distribution(cls, distribution: LikeDistribution) -> LikeCounts:
        return cls(**distribution.as_dict())


class LikeMetrics(BaseModel):
    """Distribution plus the polarization metrics derived from it."""

    likes: LikeCounts
    total_likes: int
    left_likes: int
    right_likes: int
    moderate_likes: int
    polarization_score: int

    @staticmethod
    def fields_from(distribution: LikeDistribution) -> dict[str, object]:
        return {
            "likes": LikeCounts.from_distribution(distribution),
            "total_likes": distribution.total_likes,
            "left_likes": distribution.left_likes,
            "right_likes": distribution.right_likes,
            "moderate_likes": distribution.moderate_likes,
            "polarization_score": distribution.polarization_score,
        }


class LikeRequest(BaseModel):
    """Schema for adding or removing a like."""

    entity_type: str = Field(..., description="POST or COMMENT")
    entity_id: int = Field(..., description="Identifier of the post or comment")


class LikeResponse(LikeMetrics):
    """Refreshed distribution returned after a like mutation."""

    success: bool = True
    message: str

    @classmethod
    def build(cls, distribution: LikeDistribution, message: str) -> LikeResponse:
        return cls(message=message, **LikeMetrics.fields_from(distribution))
