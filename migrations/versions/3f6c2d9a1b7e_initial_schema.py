"""initial_schema

Create the discussion thread schema for Show Talk:
- Discussions (attached to a show, season or episode)
- Comments (threaded, materialized "/"-separated path, soft delete)
- Comment votes (one UPVOTE/DOWNVOTE per user per comment)
- Reaction types (catalogue grouped by category)
- Comment reactions (one reaction per user per comment)

Users live in the hosted identity provider; user IDs are stored without a
foreign key.

Revision ID: 3f6c2d9a1b7e
Revises:
Create Date: 2026-09-14 10:12:40.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f6c2d9a1b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE discussion_entity_type AS ENUM ('show', 'season', 'episode');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE vote_value AS ENUM ('UPVOTE', 'DOWNVOTE');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # DISCUSSIONS table
    # ========================================================================
    op.create_table(
        "discussions",
        _uuid_pk(),
        sa.Column(
            "entity_type",
            sa.dialects.postgresql.ENUM(name="discussion_entity_type", create_type=False),
            nullable=False,
        ),
        sa.Column("entity_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False, server_default=""),
        sa.Column("spoiler", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_discussions_entity", "discussions", ["entity_type", "entity_id"]
    )

    # ========================================================================
    # COMMENTS table
    # ========================================================================
    op.create_table(
        "comments",
        _uuid_pk(),
        sa.Column("discussion_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("author_handle", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("depth", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("path", sa.Text(), nullable=False),
        sa.Column("spoiler", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(
            ["discussion_id"], ["discussions.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["parent_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("depth >= 0", name="depth_non_negative"),
    )
    op.create_index("idx_comments_discussion_id", "comments", ["discussion_id"])
    op.create_index("idx_comments_parent_id", "comments", ["parent_id"])
    op.create_index("idx_comments_author_id", "comments", ["author_id"])
    # text_pattern_ops lets LIKE 'prefix/%' subtree queries use the index
    op.create_index(
        "idx_comments_path",
        "comments",
        ["path"],
        postgresql_ops={"path": "text_pattern_ops"},
    )

    # ========================================================================
    # COMMENT_VOTES table
    # ========================================================================
    op.create_table(
        "comment_votes",
        _uuid_pk(),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column(
            "value",
            sa.dialects.postgresql.ENUM(name="vote_value", create_type=False),
            nullable=False,
        ),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "user_id", name="uq_comment_vote"),
    )
    op.create_index("idx_comment_votes_comment_id", "comment_votes", ["comment_id"])

    # ========================================================================
    # REACTION_TYPES table
    # ========================================================================
    op.create_table(
        "reaction_types",
        _uuid_pk(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("emoji", sa.String(16), nullable=True),
        sa.Column("category", sa.String(50), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_reaction_type_name"),
    )

    # ========================================================================
    # COMMENT_REACTIONS table
    # ========================================================================
    op.create_table(
        "comment_reactions",
        _uuid_pk(),
        sa.Column("comment_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("reaction_type_id", sa.UUID(), nullable=False),
        _timestamp("created_at"),
        sa.ForeignKeyConstraint(["comment_id"], ["comments.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["reaction_type_id"], ["reaction_types.id"], ondelete="RESTRICT"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "user_id", name="uq_comment_reaction"),
    )
    op.create_index(
        "idx_comment_reactions_comment_id", "comment_reactions", ["comment_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("comment_reactions")
    op.drop_table("reaction_types")
    op.drop_table("comment_votes")
    op.drop_table("comments")
    op.drop_table("discussions")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS vote_value")
    op.execute("DROP TYPE IF EXISTS discussion_entity_type")
