"""Answer action routes (form-encoded vote/favorite/comment endpoint)."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from tally.application.usecase.action import (
    AnswerActionRequest,
    HandleAnswerActionUseCase,
)
from tally.domain.error import DomainError
from tally.interface.api.errors import (
    client_address,
    domain_error_response,
    store_error_response,
)

router = APIRouter(tags=["actions"], route_class=DishkaRoute)


async def _handle(
    request: Request, use_case: HandleAnswerActionUseCase
) -> JSONResponse:
    form = await request.form()
    # File parts carry no action fields
    fields = {key: value for key, value in form.items() if isinstance(value, str)}

    try:
        response = await use_case.execute(
            AnswerActionRequest(fields=fields, client_address=client_address(request))
        )
    except DomainError as e:
        return domain_error_response(e)
    except SQLAlchemyError as e:
        return store_error_response(e)

    return JSONResponse(content=response.body)


@router.post("/answers/actions")
async def answer_actions(
    request: Request,
    use_case: FromDishka[HandleAnswerActionUseCase],
) -> JSONResponse:
    """Vote on, favorite, check or comment on an answer.

    The operation is chosen by the form fields:
    `op=toggle` | `op=status` (answerId, profileId),
    `level` 0-3 (answerId, userId, optional previousLevel),
    or `text` (answerId, profileId). Anything else is ignored.

    Returns:
        200 with the operation's result, 400 on malformed fields, 404 for a
        missing answer, 429 when rate limited, 500 on store failure
    """
    return await _handle(request, use_case)


@router.post("/topics/{topic_id}/actions")
async def topic_answer_actions(
    topic_id: int,
    request: Request,
    use_case: FromDishka[HandleAnswerActionUseCase],
) -> JSONResponse:
    """Same surface as /answers/actions, mounted under a topic page."""
    return await _handle(request, use_case)
