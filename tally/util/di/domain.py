"""Domain layer DI providers."""

from dishka import Scope, provide

from tally.domain.repository import (
    AnswerRepository,
    CommentRepository,
    FavoriteRepository,
    VoteRepository,
)
from tally.domain.service import (
    AnswerService,
    CommentService,
    FavoriteService,
    UserDataService,
    VoteService,
)
from tally.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_vote_service(
        self, vote_repository: VoteRepository, answer_repository: AnswerRepository
    ) -> VoteService:
        """Provide vote domain service."""
        return VoteService(
            vote_repository=vote_repository, answer_repository=answer_repository
        )

    @provide
    def get_favorite_service(
        self, favorite_repository: FavoriteRepository
    ) -> FavoriteService:
        """Provide favorite domain service."""
        return FavoriteService(favorite_repository=favorite_repository)

    @provide
    def get_comment_service(
        self,
        comment_repository: CommentRepository,
        answer_repository: AnswerRepository,
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository, answer_repository=answer_repository
        )

    @provide
    def get_user_data_service(
        self, vote_service: VoteService, favorite_service: FavoriteService
    ) -> UserDataService:
        """Provide bulk user data service."""
        return UserDataService(
            vote_service=vote_service, favorite_service=favorite_service
        )

    @provide
    def get_answer_service(
        self,
        answer_repository: AnswerRepository,
        comment_repository: CommentRepository,
        vote_service: VoteService,
        favorite_service: FavoriteService,
    ) -> AnswerService:
        """Provide answer read service."""
        return AnswerService(
            answer_repository=answer_repository,
            comment_repository=comment_repository,
            vote_service=vote_service,
            favorite_service=favorite_service,
        )
