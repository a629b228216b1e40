"""Add comment use case."""

from pydantic import BaseModel

from tally.domain.service import CommentService
from tally.domain.value import AnswerId

from ..answer.payload import CommentPayload


class AddCommentRequest(BaseModel):
    """Add comment request."""

    answer_id: int
    text: str
    profile_id: str


class AddCommentResponse(BaseModel):
    """Add comment response."""

    ok: bool = True
    comment: CommentPayload


class AddCommentUseCase:
    """Use case for commenting on an answer."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: AddCommentRequest) -> AddCommentResponse:
        """Execute add comment flow.

        Raises:
            ValidationError: If the text is empty or too long
            NotFoundError: If the answer does not exist
        """
        comment = await self.comment_service.add_comment(
            AnswerId(request.answer_id), request.text, request.profile_id
        )
        return AddCommentResponse(comment=CommentPayload.from_comment(comment))
