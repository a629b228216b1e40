"""Favorite use cases."""

from .get_favorite_status import (
    GetFavoriteStatusRequest,
    GetFavoriteStatusResponse,
    GetFavoriteStatusUseCase,
)
from .list_favorite_answers import (
    ListFavoriteAnswersRequest,
    ListFavoriteAnswersResponse,
    ListFavoriteAnswersUseCase,
)
from .toggle_favorite import (
    ToggleFavoriteRequest,
    ToggleFavoriteResponse,
    ToggleFavoriteUseCase,
)

__all__ = [
    "GetFavoriteStatusRequest",
    "GetFavoriteStatusResponse",
    "GetFavoriteStatusUseCase",
    "ListFavoriteAnswersRequest",
    "ListFavoriteAnswersResponse",
    "ListFavoriteAnswersUseCase",
    "ToggleFavoriteRequest",
    "ToggleFavoriteResponse",
    "ToggleFavoriteUseCase",
]
