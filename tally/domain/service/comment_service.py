"""Comment domain service."""

import logfire

from tally.domain.error import NotFoundError, ValidationError
from tally.domain.model.comment import Comment
from tally.domain.repository import AnswerRepository, CommentRepository
from tally.domain.value import AnswerId

from .base import Service

MAX_COMMENT_LENGTH = 500


class CommentService(Service):
    """Domain service for answer comments."""

    def __init__(
        self,
        comment_repository: CommentRepository,
        answer_repository: AnswerRepository,
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            answer_repository: Answer repository (existence checks)
        """
        self.comment_repository = comment_repository
        self.answer_repository = answer_repository

    async def add_comment(
        self, answer_id: AnswerId, text: str, profile_id: str
    ) -> Comment:
        """Attach a comment to an answer.

        Args:
            answer_id: Answer ID
            text: Comment body (1-500 characters after trimming)
            profile_id: Commenting profile

        Returns:
            Stored comment

        Raises:
            ValidationError: If inputs are malformed
            NotFoundError: If the answer does not exist
        """
        answer_id = self.require_answer_id(answer_id)
        profile_id = self.require_voter_id(profile_id)
        body = (text or "").strip()
        if not body or len(body) > MAX_COMMENT_LENGTH:
            raise ValidationError(
                f"Comment text must be 1-{MAX_COMMENT_LENGTH} characters"
            )

        with logfire.span(
            "comment_service.add_comment", answer_id=answer_id, profile_id=profile_id
        ):
            if not await self.answer_repository.exists(answer_id):
                logfire.warn("Comment on non-existent answer", answer_id=answer_id)
                raise NotFoundError("Answer", str(answer_id))

            comment = await self.comment_repository.save(
                Comment(answer_id=answer_id, text=body, profile_id=profile_id)
            )
            logfire.info("Comment added", answer_id=answer_id, comment_id=comment.id)
            return comment
