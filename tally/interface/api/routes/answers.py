"""Answer listing routes."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Query, status

from tally.application.usecase.answer import (
    ListTopicAnswersRequest,
    ListTopicAnswersResponse,
    ListTopicAnswersUseCase,
)
from tally.application.usecase.favorite import (
    ListFavoriteAnswersRequest,
    ListFavoriteAnswersResponse,
    ListFavoriteAnswersUseCase,
)
from tally.domain.error import ValidationError

router = APIRouter(tags=["answers"], route_class=DishkaRoute)


@router.get("/topics/{topic_id}/answers", response_model=ListTopicAnswersResponse)
async def list_topic_answers(
    topic_id: int,
    use_case: FromDishka[ListTopicAnswersUseCase],
    cursor: datetime | None = Query(default=None),
    page_size: int = Query(default=20, ge=1, le=100, alias="pageSize"),
    profile_id: str | None = Query(default=None, alias="profileId"),
) -> ListTopicAnswersResponse:
    """List a topic's answers newest first, with vote and favorite hints.

    Pass the returned `next_cursor` as `cursor` to fetch the next page.
    """
    return await use_case.execute(
        ListTopicAnswersRequest(
            topic_id=topic_id,
            cursor=cursor,
            page_size=page_size,
            viewer_id=profile_id or None,
        )
    )


@router.get("/answers/favorites", response_model=ListFavoriteAnswersResponse)
async def list_favorite_answers(
    use_case: FromDishka[ListFavoriteAnswersUseCase],
    profile_id: str = Query(alias="profileId"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=20, ge=1, le=100, alias="pageSize"),
) -> ListFavoriteAnswersResponse:
    """List the answers a profile has favorited, most recent first."""
    try:
        return await use_case.execute(
            ListFavoriteAnswersRequest(
                voter_id=profile_id, page=page, page_size=page_size
            )
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
