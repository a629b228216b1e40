"""Wire shapes for answers and their aggregates."""

from datetime import datetime

from pydantic import BaseModel

from tally.domain.model import Answer, Comment, VoteTally


class VoteTallyPayload(BaseModel):
    """Per-level counts plus the weighted score shown to readers."""

    level1: int
    level2: int
    level3: int
    score: int

    @classmethod
    def from_tally(cls, tally: VoteTally) -> "VoteTallyPayload":
        return cls(
            level1=tally.level1,
            level2=tally.level2,
            level3=tally.level3,
            score=tally.score,
        )


class AnswerPayload(BaseModel):
    """Answer as returned to clients."""

    id: int
    text: str
    profile_id: str | None
    topic_id: int | None
    created_at: datetime
    votes: VoteTallyPayload
    votes_by: dict[str, int]
    favorited: bool | None = None
    comment_count: int = 0

    @classmethod
    def from_answer(cls, answer: Answer) -> "AnswerPayload":
        return cls(
            id=answer.id,
            text=answer.text,
            profile_id=answer.profile_id,
            topic_id=answer.topic_id,
            created_at=answer.created_at,
            votes=VoteTallyPayload.from_tally(answer.votes),
            votes_by=dict(answer.votes_by),
            favorited=answer.favorited,
            comment_count=answer.comment_count,
        )


class CommentPayload(BaseModel):
    """Comment as returned to clients."""

    id: int
    answer_id: int
    text: str
    profile_id: str | None
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentPayload":
        return cls(
            id=int(comment.id or 0),
            answer_id=comment.answer_id,
            text=comment.text,
            profile_id=comment.profile_id,
            created_at=comment.created_at,
        )
