"""initial schema

Revision ID: 3b1f6c2a9d40
Revises:
Create Date: 2026-10-18 09:12:44.512031

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3b1f6c2a9d40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

pol_lean = sa.Enum("FL", "L", "SL", "M", "SR", "R", "FR", name="pol_lean")
entity_type = sa.Enum("POST", "COMMENT", name="entity_type")


def upgrade() -> None:
    """Create users, posts, comments and likes."""
    op.create_table(
        "users",
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("first_name", sa.String(length=50), nullable=False),
        sa.Column("last_name", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("pol_lean", pol_lean, nullable=False),
        sa.Column("account_verified", sa.Boolean(), nullable=False),
        sa.Column("date_created", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("username"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "posts",
        sa.Column("post_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("sources", sa.Text(), nullable=True),
        sa.Column("date_posted", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["username"], ["users.username"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id"),
    )
    op.create_index("ix_posts_date_posted", "posts", ["date_posted"])
    op.create_table(
        "comments",
        sa.Column("comment_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("parent_type", entity_type, nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("date_posted", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "parent_type = 'COMMENT' OR parent_id = post_id",
            name="ck_comments_top_level_parent",
        ),
        sa.ForeignKeyConstraint(["post_id"], ["posts.post_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["username"], ["users.username"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("comment_id"),
    )
    op.create_index("ix_comments_thread", "comments", ["post_id", "parent_type", "parent_id"])
    op.create_index("ix_comments_date_posted", "comments", ["date_posted"])
    op.create_table(
        "likes",
        sa.Column("like_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=50), nullable=False),
        sa.Column("entity_type", entity_type, nullable=False),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("pol_lean", pol_lean, nullable=False),
        sa.Column("date_liked", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["username"], ["users.username"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("like_id"),
        sa.UniqueConstraint("username", "entity_type", "entity_id", name="uq_likes_user_entity"),
    )
    op.create_index("ix_likes_entity", "likes", ["entity_type", "entity_id"])
    op.create_index("ix_likes_username", "likes", ["username"])


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index("ix_likes_username", table_name="likes")
    op.drop_index("ix_likes_entity", table_name="likes")
    op.drop_table("likes")
    op.drop_index("ix_comments_date_posted", table_name="comments")
    op.drop_index("ix_comments_thread", table_name="comments")
    op.drop_table("comments")
    op.drop_index("ix_posts_date_posted", table_name="posts")
    op.drop_table("posts")
    op.drop_table("users")
    bind = op.get_bind()
    entity_type.drop(bind, checkfirst=True)
    pol_lean.drop(bind, checkfirst=True)
