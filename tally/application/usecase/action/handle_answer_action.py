"""Answer action use case.

One form-encoded endpoint carries four operations, told apart by which
fields are present:

- ``op=toggle`` flips a favorite
- ``op=status`` reads a favorite without writing
- ``level`` casts, changes or removes a vote
- ``answerId`` with ``text`` adds a comment

A request carrying none of these is ignored without charging the rate
limiter. Everything else goes through the admission guard first.
"""

from enum import Enum
from typing import Any, Mapping

import logfire
from pydantic import BaseModel, Field

from tally.domain.error import ValidationError
from tally.domain.service import AdmissionGuard
from tally.domain.value import CAST_LEVELS, AdmissionKey, DedupKey, OperationKind

from ..comment import AddCommentRequest, AddCommentUseCase
from ..favorite import (
    GetFavoriteStatusRequest,
    GetFavoriteStatusUseCase,
    ToggleFavoriteRequest,
    ToggleFavoriteUseCase,
)
from ..vote import CastVoteRequest, CastVoteUseCase


class AnswerActionRequest(BaseModel):
    """Raw form fields plus the caller's network address."""

    fields: dict[str, str] = Field(default_factory=dict)
    client_address: str | None = None


class AnswerActionResponse(BaseModel):
    """JSON body to return with status 200."""

    body: dict[str, Any]
    deduped: bool = False


class _Intent(str, Enum):
    IGNORED = "ignored"
    TOGGLE = OperationKind.TOGGLE.value
    STATUS = OperationKind.STATUS.value
    VOTE = OperationKind.VOTE.value
    COMMENT = OperationKind.COMMENT.value


def resolve_intent(fields: Mapping[str, str]) -> _Intent:
    """Decide which operation a form describes."""
    op = fields.get("op")
    if op == OperationKind.TOGGLE.value:
        return _Intent.TOGGLE
    if op == OperationKind.STATUS.value:
        return _Intent.STATUS
    if "level" in fields:
        return _Intent.VOTE
    if fields.get("answerId") and fields.get("text"):
        return _Intent.COMMENT
    return _Intent.IGNORED


def parse_answer_id(raw: str | None) -> int:
    """Parse a positive integer answer id from a form value."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError("answerId must be a positive integer") from None
    if value <= 0:
        raise ValidationError("answerId must be a positive integer")
    return value


def parse_level(raw: str | None) -> int:
    """Parse a vote level 0..3 from a form value."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise ValidationError("level must be 0, 1, 2 or 3") from None
    if value not in (0, 1, 2, 3):
        raise ValidationError("level must be 0, 1, 2 or 3")
    return value


def _optional_level(raw: str | None) -> int | None:
    # previousLevel is diagnostic only, so garbage is dropped rather than rejected
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _require(fields: Mapping[str, str], name: str) -> str:
    value = (fields.get(name) or "").strip()
    if not value:
        raise ValidationError(f"{name} is required")
    return value


def _superseded_keys(intent: _Intent, key: DedupKey) -> list[DedupKey]:
    """Keys whose remembered outcome a successful write makes stale."""
    if intent is _Intent.VOTE:
        operations = [
            f"{OperationKind.VOTE.value}:{level}" for level in sorted(CAST_LEVELS)
        ]
    elif intent is _Intent.TOGGLE:
        operations = [OperationKind.STATUS.value]
    else:
        return []
    return [
        DedupKey(operation=operation, voter_id=key.voter_id, answer_id=key.answer_id)
        for operation in operations
        if operation != key.operation
    ]


class HandleAnswerActionUseCase:
    """Use case routing answer actions through the admission guard."""

    def __init__(
        self,
        admission_guard: AdmissionGuard,
        cast_vote_use_case: CastVoteUseCase,
        toggle_favorite_use_case: ToggleFavoriteUseCase,
        get_favorite_status_use_case: GetFavoriteStatusUseCase,
        add_comment_use_case: AddCommentUseCase,
    ) -> None:
        self.admission_guard = admission_guard
        self.cast_vote_use_case = cast_vote_use_case
        self.toggle_favorite_use_case = toggle_favorite_use_case
        self.get_favorite_status_use_case = get_favorite_status_use_case
        self.add_comment_use_case = add_comment_use_case

    async def execute(self, request: AnswerActionRequest) -> AnswerActionResponse:
        """Execute an answer action.

        Steps:
        1. Resolve the intent; ignore forms without one
        2. Charge the rate limiter for the caller's admission key
        3. Validate the fields for the intent
        4. Short-circuit duplicates with the previous outcome
        5. Dispatch and remember the outcome for later duplicates

        Raises:
            AdmissionRejectedError: If the caller is rate limited
            ValidationError: If required fields are missing or malformed
            NotFoundError: If the answer does not exist
        """
        fields = request.fields
        intent = resolve_intent(fields)
        if intent is _Intent.IGNORED:
            logfire.debug("Answer action ignored", keys=sorted(fields))
            return AnswerActionResponse(body={"ok": True, "ignored": True})

        voter = fields.get("profileId") or fields.get("userId")
        admission_key = AdmissionKey.for_request(voter, request.client_address)

        with logfire.span(
            "answer_action.execute",
            intent=intent.value,
            admission_key=str(admission_key),
        ):
            self.admission_guard.check_rate(admission_key)

            if intent is _Intent.COMMENT:
                return await self._add_comment(fields)

            dedup_key, dispatch = self._prepare(intent, fields)
            verdict = self.admission_guard.check_duplicate(dedup_key)
            if verdict.duplicate:
                body = dict(verdict.previous_outcome or {})
                body.update(ok=True, deduped=True)
                return AnswerActionResponse(body=body, deduped=True)

            try:
                body = await dispatch()
            except Exception:
                self.admission_guard.release(dedup_key)
                raise
            self.admission_guard.record_outcome(dedup_key, body)
            for stale in _superseded_keys(intent, dedup_key):
                self.admission_guard.release(stale)
            return AnswerActionResponse(body=body)

    def _prepare(self, intent: _Intent, fields: Mapping[str, str]):
        """Validate fields and build the dedup key and dispatcher for intent."""
        if intent is _Intent.VOTE:
            answer_id = parse_answer_id(fields.get("answerId"))
            voter_id = _require(fields, "userId")
            level = parse_level(fields.get("level"))
            vote_request = CastVoteRequest(
                answer_id=answer_id,
                voter_id=voter_id,
                level=level,
                previous_level=_optional_level(fields.get("previousLevel")),
            )
            key = DedupKey(
                operation=f"{OperationKind.VOTE.value}:{level}",
                voter_id=voter_id,
                answer_id=answer_id,
            )

            async def vote() -> dict[str, Any]:
                response = await self.cast_vote_use_case.execute(vote_request)
                return response.model_dump(mode="json")

            return key, vote

        answer_id = parse_answer_id(_require(fields, "answerId"))
        voter_id = _require(fields, "profileId")
        key = DedupKey(operation=intent.value, voter_id=voter_id, answer_id=answer_id)

        if intent is _Intent.TOGGLE:

            async def toggle() -> dict[str, Any]:
                response = await self.toggle_favorite_use_case.execute(
                    ToggleFavoriteRequest(answer_id=answer_id, voter_id=voter_id)
                )
                return response.model_dump(mode="json")

            return key, toggle

        async def status() -> dict[str, Any]:
            response = await self.get_favorite_status_use_case.execute(
                GetFavoriteStatusRequest(answer_id=answer_id, voter_id=voter_id)
            )
            return response.model_dump(mode="json")

        return key, status

    async def _add_comment(self, fields: Mapping[str, str]) -> AnswerActionResponse:
        answer_id = parse_answer_id(fields.get("answerId"))
        profile_id = _require(fields, "profileId")
        response = await self.add_comment_use_case.execute(
            AddCommentRequest(
                answer_id=answer_id, text=fields.get("text", ""), profile_id=profile_id
            )
        )
        return AnswerActionResponse(body=response.model_dump(mode="json"))
