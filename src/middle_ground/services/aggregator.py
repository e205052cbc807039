"""Like distributions and the polarization metrics derived from them."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from sqlalchemy.orm import Session

from middle_ground.models.enums import LEFT_LEANINGS, RIGHT_LEANINGS, EntityType, Leaning
from middle_ground.repositories.like_repo import LikeRepository
from middle_ground.services.entities import EntityRef

__all__ = ["LikeDistribution", "aggregate", "aggregate_many"]


@dataclass(frozen=True)
class LikeDistribution:
    """Like counts for one entity across all seven leanings.

    Every leaning is always present; the derived totals are computed from
    the counts on access and never stored.
    """

    counts: Mapping[Leaning, int]

    @classmethod
    def from_counts(cls, sparse: Mapping[Leaning | str, int] | None = None) -> LikeDistribution:
        """Build a zero-filled distribution from possibly sparse counts."""
        filled = {leaning: 0 for leaning in Leaning}
        for key, count in (sparse or {}).items():
            filled[Leaning(key)] = int(count)
        return cls(MappingProxyType(filled))

    @classmethod
    def empty(cls) -> LikeDistribution:
        return cls.from_counts()

    def __getitem__(self, leaning: Leaning | str) -> int:
        return self.counts[Leaning(leaning)]

    @property
    def total_likes(self) -> int:
        return sum(self.counts.values())

    @property
    def left_likes(self) -> int:
        return sum(self.counts[leaning] for leaning in LEFT_LEANINGS)

    @property
    def right_likes(self) -> int:
        return sum(self.counts[leaning] for leaning in RIGHT_LEANINGS)

    @property
    def moderate_likes(self) -> int:
        return self.counts[Leaning.M]

    @property
    def polarization_score(self) -> int:
        """Absolute gap between right- and left-leaning likes; 0 is balanced."""
        return abs(self.right_likes - self.left_likes)

    def as_dict(self) -> dict[str, int]:
        """Return ``{code: count}`` for all seven codes in scale order."""
        return {leaning.value: self.counts[leaning] for leaning in Leaning}


def aggregate(db: Session, ref: EntityRef) -> LikeDistribution:
    """Return the like distribution of a single entity.

    Entities without likes yield an all-zero distribution. Existence of the
    entity is not checked here.
    """
    return LikeDistribution.from_counts(LikeRepository(db).count_by_category(ref))


def aggregate_many(
    db: Session,
    kind: EntityType,
    entity_ids: Iterable[int],
) -> dict[int, LikeDistribution]:
    """Return distributions for many entities of one kind with a single query."""
    ids = list(entity_ids)
    sparse = LikeRepository(db).count_by_category_many(kind, ids)
    return {entity_id: LikeDistribution.from_counts(sparse.get(entity_id)) for entity_id in ids}
