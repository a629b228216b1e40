"""Answer read service.

Attaches vote tallies, per-voter maps, favorite flags and comment counts to
answers read from the answer collaborator. These aggregates are hints for the
first render; the vote and favorite services stay the authority.
"""

from datetime import datetime
from typing import Optional, Sequence

import logfire

from tally.domain.error import NotFoundError
from tally.domain.model.answer import Answer
from tally.domain.repository import AnswerRepository, CommentRepository
from tally.domain.value import AnswerId, TopicId, VoterId

from .base import Service
from .favorite_service import FavoriteService
from .vote_service import VoteService


class AnswerService(Service):
    """Domain service for answers with their aggregates."""

    def __init__(
        self,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
        vote_service: VoteService,
        favorite_service: FavoriteService,
    ) -> None:
        self.answer_repository = answer_repository
        self.comment_repository = comment_repository
        self.vote_service = vote_service
        self.favorite_service = favorite_service

    async def get_answer(
        self, answer_id: AnswerId, viewer_id: Optional[VoterId] = None
    ) -> Answer:
        """Get one answer with aggregates.

        Raises:
            NotFoundError: If the answer does not exist
        """
        answer = await self.answer_repository.find_by_id(answer_id)
        if not answer:
            raise NotFoundError("Answer", str(answer_id))
        [hydrated] = await self.hydrate([answer], viewer_id)
        return hydrated

    async def get_topic_page(
        self,
        topic_id: TopicId,
        cursor: Optional[datetime] = None,
        page_size: int = 20,
        viewer_id: Optional[VoterId] = None,
    ) -> tuple[list[Answer], Optional[datetime]]:
        """Get a cursor page of a topic's answers, newest first.

        Returns:
            Tuple of (answers, next cursor). The next cursor is the last
            answer's created_at when the page is full, otherwise None.
        """
        if page_size <= 0:
            return [], None

        with logfire.span(
            "answer_service.get_topic_page", topic_id=topic_id, page_size=page_size
        ):
            answers = await self.answer_repository.find_page_by_topic(
                topic_id, cursor=cursor, limit=page_size
            )
            hydrated = await self.hydrate(answers, viewer_id)
            next_cursor = hydrated[-1].created_at if len(hydrated) == page_size else None
            return hydrated, next_cursor

    async def get_favorite_answers(
        self, voter_id: VoterId, page: int = 1, page_size: int = 20
    ) -> tuple[list[Answer], int]:
        """Get the answers a voter has favorited, most recently favorited first.

        Returns:
            Tuple of (answers on this page, total favorites)
        """
        voter_id = self.require_voter_id(voter_id)
        page = max(1, page)
        offset = (page - 1) * page_size

        with logfire.span(
            "answer_service.get_favorite_answers", voter_id=voter_id, page=page
        ):
            ordered_ids, total = await self.favorite_service.page_for_voter(
                voter_id, offset=offset, limit=page_size
            )
            if not ordered_ids:
                return [], total

            answers = await self.answer_repository.find_by_ids(ordered_ids)
            position = {aid: index for index, aid in enumerate(ordered_ids)}
            answers.sort(key=lambda a: position.get(a.id, 0))

            hydrated = await self.hydrate(answers, None)
            return [a.model_copy(update={"favorited": True}) for a in hydrated], total

    async def hydrate(
        self, answers: Sequence[Answer], viewer_id: Optional[VoterId]
    ) -> list[Answer]:
        """Attach aggregates to answers with batched reads (no N+1)."""
        if not answers:
            return []

        ids = [a.id for a in answers]
        tallies = await self.vote_service.tallies_for_answers(ids)
        votes_by = await self.vote_service.votes_by_for_answers(ids)
        comment_counts = await self.comment_repository.count_by_answers(ids)
        favorites = (
            await self.favorite_service.favorites_for_voter(viewer_id, ids)
            if viewer_id
            else set()
        )

        hydrated = []
        for answer in answers:
            update = {
                "votes": tallies.get(answer.id, answer.votes),
                "votes_by": votes_by.get(answer.id, {}),
                "comment_count": comment_counts.get(answer.id, 0),
            }
            if viewer_id:
                update["favorited"] = answer.id in favorites
            hydrated.append(answer.model_copy(update=update))
        return hydrated
