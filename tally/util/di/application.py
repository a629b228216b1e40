"""Application layer DI providers."""

from dishka import Scope, provide

from tally.application.usecase.action import HandleAnswerActionUseCase
from tally.application.usecase.answer import ListTopicAnswersUseCase
from tally.application.usecase.comment import AddCommentUseCase
from tally.application.usecase.favorite import (
    GetFavoriteStatusUseCase,
    ListFavoriteAnswersUseCase,
    ToggleFavoriteUseCase,
)
from tally.application.usecase.user_data import GetUserAnswerDataUseCase
from tally.application.usecase.vote import CastVoteUseCase
from tally.domain.service import (
    AdmissionGuard,
    AnswerService,
    CommentService,
    FavoriteService,
    UserDataService,
    VoteService,
)
from tally.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Vote use cases
    @provide(scope=Scope.REQUEST)
    def get_cast_vote_use_case(
        self, vote_service: VoteService, answer_service: AnswerService
    ) -> CastVoteUseCase:
        """Provide cast vote use case."""
        return CastVoteUseCase(vote_service=vote_service, answer_service=answer_service)

    # Favorite use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_favorite_use_case(
        self, favorite_service: FavoriteService
    ) -> ToggleFavoriteUseCase:
        """Provide toggle favorite use case."""
        return ToggleFavoriteUseCase(favorite_service=favorite_service)

    @provide(scope=Scope.REQUEST)
    def get_favorite_status_use_case(
        self, favorite_service: FavoriteService
    ) -> GetFavoriteStatusUseCase:
        """Provide favorite status use case."""
        return GetFavoriteStatusUseCase(favorite_service=favorite_service)

    @provide(scope=Scope.REQUEST)
    def get_list_favorite_answers_use_case(
        self, answer_service: AnswerService
    ) -> ListFavoriteAnswersUseCase:
        """Provide list favorite answers use case."""
        return ListFavoriteAnswersUseCase(answer_service=answer_service)

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self, comment_service: CommentService
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(comment_service=comment_service)

    # Read use cases
    @provide(scope=Scope.REQUEST)
    def get_user_answer_data_use_case(
        self, user_data_service: UserDataService
    ) -> GetUserAnswerDataUseCase:
        """Provide bulk user data use case."""
        return GetUserAnswerDataUseCase(user_data_service=user_data_service)

    @provide(scope=Scope.REQUEST)
    def get_list_topic_answers_use_case(
        self, answer_service: AnswerService
    ) -> ListTopicAnswersUseCase:
        """Provide list topic answers use case."""
        return ListTopicAnswersUseCase(answer_service=answer_service)

    # Action endpoint
    @provide(scope=Scope.REQUEST)
    def get_handle_answer_action_use_case(
        self,
        admission_guard: AdmissionGuard,
        cast_vote_use_case: CastVoteUseCase,
        toggle_favorite_use_case: ToggleFavoriteUseCase,
        get_favorite_status_use_case: GetFavoriteStatusUseCase,
        add_comment_use_case: AddCommentUseCase,
    ) -> HandleAnswerActionUseCase:
        """Provide answer action use case."""
        return HandleAnswerActionUseCase(
            admission_guard=admission_guard,
            cast_vote_use_case=cast_vote_use_case,
            toggle_favorite_use_case=toggle_favorite_use_case,
            get_favorite_status_use_case=get_favorite_status_use_case,
            add_comment_use_case=add_comment_use_case,
        )
