"""User data use cases."""

from .get_user_answer_data import (
    GetUserAnswerDataRequest,
    GetUserAnswerDataResponse,
    GetUserAnswerDataUseCase,
)

__all__ = [
    "GetUserAnswerDataRequest",
    "GetUserAnswerDataResponse",
    "GetUserAnswerDataUseCase",
]
