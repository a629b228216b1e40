"""Domain services for tally."""

from tally.domain.service.admission_service import (
    AdmissionGuard,
    DedupCheck,
    DuplicateSuppressor,
    TokenBucketRateLimiter,
)
from tally.domain.service.answer_service import AnswerService
from tally.domain.service.base import Service
from tally.domain.service.comment_service import CommentService
from tally.domain.service.favorite_service import FavoriteService
from tally.domain.service.user_data_service import UserDataService
from tally.domain.service.vote_service import VoteService

__all__ = [
    "AdmissionGuard",
    "AnswerService",
    "CommentService",
    "DedupCheck",
    "DuplicateSuppressor",
    "FavoriteService",
    "Service",
    "TokenBucketRateLimiter",
    "UserDataService",
    "VoteService",
]
