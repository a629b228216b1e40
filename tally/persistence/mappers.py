"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand and
validated at this boundary.
"""

from typing import Any, Dict

from tally.domain.model import Answer, Comment, VoteRecord
from tally.domain.value import AnswerId, CommentId, TopicId, VoteLevel, VoterId


def row_to_vote(row: Dict[str, Any]) -> VoteRecord:
    """Convert database row to VoteRecord."""
    return VoteRecord(
        answer_id=AnswerId(int(row["answer_id"])),
        voter_id=VoterId(str(row["profile_id"])),
        level=VoteLevel(int(row["level"])),
    )


def row_to_answer(row: Dict[str, Any]) -> Answer:
    """Convert database row to Answer (without aggregates)."""
    topic_id = row.get("topic_id")
    return Answer(
        id=AnswerId(int(row["id"])),
        text=row["text"],
        profile_id=row.get("profile_id"),
        topic_id=TopicId(int(topic_id)) if topic_id is not None else None,
        created_at=row["created_at"],
    )


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment."""
    return Comment(
        id=CommentId(int(row["id"])),
        answer_id=AnswerId(int(row["answer_id"])),
        text=row["text"],
        profile_id=row.get("profile_id"),
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment to an insert dict (id assigned by the database)."""
    return {
        "answer_id": comment.answer_id,
        "text": comment.text,
        "profile_id": comment.profile_id,
        "created_at": comment.created_at,
    }
