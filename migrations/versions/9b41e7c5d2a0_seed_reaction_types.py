"""seed_reaction_types

Revision ID: 9b41e7c5d2a0
Revises: 3f6c2d9a1b7e
Create Date: 2026-09-14 10:31:02.771934

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "9b41e7c5d2a0"
down_revision: Union[str, Sequence[str], None] = "3f6c2d9a1b7e"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# (name, emoji, category, description)
REACTION_TYPES = [
    # Positive
    ("slay", "💅", "positive", "Absolutely nailed it"),
    ("periodt", "💯", "positive", "Nothing more to add"),
    ("yasss", "✨", "positive", "Pure excitement"),
    ("queen", "👑", "positive", "Royalty behaviour"),
    ("king", "👑", "positive", "Royalty behaviour"),
    ("iconic", "🌟", "positive", "Instant classic"),
    ("serve", "🔥", "positive", "Serving looks and lines"),
    ("crown", "👑", "positive", "Hand them the crown"),
    # Negative
    ("gagged", "😱", "negative", "Left speechless"),
    ("pissed", "😤", "negative", "Not happy about it"),
    ("cringe", "😬", "negative", "Hard to watch"),
    ("mess", "💀", "negative", "A total mess"),
    ("trash", "🗑️", "negative", "Belongs in the bin"),
    ("bye", "👋", "negative", "Show them the door"),
    ("nope", "🙅", "negative", "Absolutely not"),
    ("ew", "🤢", "negative", "Gross"),
    # Emotional
    ("crying", "😭", "emotional", "In tears"),
    ("dead", "💀", "emotional", "Could not handle it"),
    ("screaming", "😱", "emotional", "Screaming at the screen"),
    ("shook", "😨", "emotional", "Completely shaken"),
    ("wig", "💇‍♀️", "emotional", "Wig snatched"),
    ("tea", "☕", "emotional", "Spilling the tea"),
    ("spill", "🫖", "emotional", "Tell us everything"),
    ("receipts", "🧾", "emotional", "Bring the proof"),
    # Reality TV
    ("drama", "🎭", "reality-tv", "Pure drama"),
    ("plot", "🤔", "reality-tv", "Plot twist"),
    ("alliance", "🤝", "reality-tv", "Alliance formed"),
    ("betrayal", "🗡️", "reality-tv", "Stabbed in the back"),
    ("elimination", "🚪", "reality-tv", "Headed for the exit"),
    ("immunity", "🛡️", "reality-tv", "Safe this week"),
    ("challenge", "🏆", "reality-tv", "Challenge winner"),
    ("confessional", "🎤", "reality-tv", "Straight to the confessional"),
]


def upgrade() -> None:
    """Seed the reaction catalogue."""
    reaction_types_table = sa.table(
        "reaction_types",
        sa.column("name", sa.String),
        sa.column("emoji", sa.String),
        sa.column("category", sa.String),
        sa.column("description", sa.Text),
    )

    op.bulk_insert(
        reaction_types_table,
        [
            {
                "name": name,
                "emoji": emoji,
                "category": category,
                "description": description,
            }
            for name, emoji, category, description in REACTION_TYPES
        ],
    )


def downgrade() -> None:
    """Remove seeded reaction types."""
    reaction_types_table = sa.table("reaction_types", sa.column("name", sa.String))
    op.execute(
        reaction_types_table.delete().where(
            reaction_types_table.c.name.in_([name for name, *_ in REACTION_TYPES])
        )
    )
