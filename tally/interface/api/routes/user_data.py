"""Bulk user data route used for client hydration."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tally.application.usecase.user_data import (
    GetUserAnswerDataRequest,
    GetUserAnswerDataResponse,
    GetUserAnswerDataUseCase,
)
from tally.domain.error import DomainError
from tally.interface.api.errors import domain_error_response, store_error_response

router = APIRouter(prefix="/api", tags=["user-data"], route_class=DishkaRoute)


def _answer_ids(raw: list[str]) -> list[int]:
    ids = []
    for value in raw:
        for part in value.split(","):
            part = part.strip()
            if part.isdigit() and int(part) > 0:
                ids.append(int(part))
    return ids


@router.get("/user-data", response_model=GetUserAnswerDataResponse)
async def get_user_data(
    use_case: FromDishka[GetUserAnswerDataUseCase],
    profile_id: str | None = Query(default=None, alias="profileId"),
    answer_ids: list[str] = Query(default=[], alias="answerIds"),
):
    """Return the viewer's vote levels and favorites for a list of answers.

    Anonymous callers and empty id lists get empty data.
    """
    request = GetUserAnswerDataRequest(
        voter_id=profile_id or None, answer_ids=_answer_ids(answer_ids)
    )
    try:
        return await use_case.execute(request)
    except DomainError as e:
        return domain_error_response(e, votes={}, favorites=[])
    except SQLAlchemyError as e:
        return store_error_response(e, votes={}, favorites=[])
