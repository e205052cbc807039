"""Closed vocabularies shared by the ORM models and services."""

from __future__ import annotations

from enum import Enum

from sqlalchemy import Enum as SAEnum


class Leaning(str, Enum):
    """Seven-point political leaning scale, ordered far-left to far-right."""

    FL = "FL"
    L = "L"
    SL = "SL"
    M = "M"
    SR = "SR"
    R = "R"
    FR = "FR"


LEFT_LEANINGS: tuple[Leaning, ...] = (Leaning.FL, Leaning.L, Leaning.SL)
RIGHT_LEANINGS: tuple[Leaning, ...] = (Leaning.SR, Leaning.R, Leaning.FR)


class EntityType(str, Enum):
    """Kinds of content that can be liked or replied to."""

    POST = "POST"
    COMMENT = "COMMENT"


# Column types shared across tables so each database enum is declared once.
LEANING_TYPE = SAEnum(Leaning, name="pol_lean")
ENTITY_TYPE = SAEnum(EntityType, name="entity_type")
