"""SQLAlchemy table definitions for tally.

Answers and comments are owned by the answer collaborator; votes and
favorites are the aggregates this service writes.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

metadata = MetaData()

# ============================================================================
# ANSWERS TABLE (read-only here)
# ============================================================================
answers_table = Table(
    "answers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("text", Text, nullable=False),
    Column("profile_id", String(255), nullable=True),
    Column("topic_id", Integer, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_answers_topic_created", answers_table.c.topic_id, answers_table.c.created_at.desc())

# ============================================================================
# VOTES TABLE (one row per answer/voter pair)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "answer_id", Integer, ForeignKey("answers.id", ondelete="CASCADE"), nullable=False
    ),
    Column("profile_id", String(255), nullable=False),
    Column("level", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("answer_id", "profile_id", name="uq_votes_answer_profile"),
    CheckConstraint("level BETWEEN 1 AND 3", name="ck_votes_level"),
)

Index("idx_votes_profile_id", votes_table.c.profile_id)

# ============================================================================
# FAVORITES TABLE (existence-only)
# ============================================================================
favorites_table = Table(
    "favorites",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "answer_id", Integer, ForeignKey("answers.id", ondelete="CASCADE"), nullable=False
    ),
    Column("profile_id", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("answer_id", "profile_id", name="uq_favorites_answer_profile"),
)

Index("idx_favorites_profile_created", favorites_table.c.profile_id, favorites_table.c.created_at.desc())

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "answer_id", Integer, ForeignKey("answers.id", ondelete="CASCADE"), nullable=False
    ),
    Column("text", Text, nullable=False),
    Column("profile_id", String(255), nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_comments_answer_id", comments_table.c.answer_id)
