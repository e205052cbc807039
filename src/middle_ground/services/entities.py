"""Typed references to likeable entities and comment parents."""

from __future__ import annotations

from dataclasses import dataclass

from middle_ground.models.enums import EntityType
from middle_ground.services.errors import AmbiguousParent, InvalidEntityType, MissingFields

__all__ = [
    "CommentParent",
    "EntityRef",
    "ParentRef",
    "PostParent",
    "parent_from_fields",
]


@dataclass(frozen=True)
class EntityRef:
    """A post or comment identified by its kind and id.

    Post and comment ids come from separate sequences, so the numeric id is
    never a lookup key on its own.
    """

    kind: EntityType
    id: int

    @classmethod
    def parse(cls, kind: str | EntityType, entity_id: int) -> EntityRef:
        """Build a reference from untrusted input.

        Raises:
            InvalidEntityType: If ``kind`` is not POST or COMMENT.
        """
        if isinstance(kind, EntityType):
            return cls(kind, entity_id)
        try:
            return cls(EntityType(kind), entity_id)
        except ValueError as err:
            raise InvalidEntityType() from err

    @classmethod
    def post(cls, post_id: int) -> EntityRef:
        return cls(EntityType.POST, post_id)

    @classmethod
    def comment(cls, comment_id: int) -> EntityRef:
        return cls(EntityType.COMMENT, comment_id)


@dataclass(frozen=True)
class PostParent:
    """Comment replying directly to a post."""

    post_id: int


@dataclass(frozen=True)
class CommentParent:
    """Comment replying to another comment."""

    comment_id: int


ParentRef = PostParent | CommentParent


def parent_from_fields(post_id: int | None, parent_comment_id: int | None) -> ParentRef:
    """Convert the two optional request fields into a single parent reference.

    Raises:
        MissingFields: If neither field is set.
        AmbiguousParent: If both fields are set.
    """
    if post_id is None and parent_comment_id is None:
        raise MissingFields("Either post_id or parent_comment_id must be provided")
    if post_id is not None and parent_comment_id is not None:
        raise AmbiguousParent()
    if parent_comment_id is not None:
        return CommentParent(parent_comment_id)
    return PostParent(post_id)  # type: ignore[arg-type]
