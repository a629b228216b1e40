"""Admission guard for mutating answer actions.

Two process-local mechanisms sit in front of the vote and favorite writers:

- a token bucket per admission key, refusing bursts beyond its capacity
- a duplicate suppressor that answers an identical request arriving within a
  short window with the previous outcome instead of writing again

Both live in memory and are lost on restart or scale-out. They mitigate
abuse and double submits; correctness never depends on them.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable

import logfire

from tally.config import AdmissionSettings
from tally.domain.error import AdmissionRejectedError
from tally.domain.value import AdmissionKey, DedupKey

Clock = Callable[[], float]

# Maps are pruned once they track more keys than this
MAX_TRACKED_KEYS = 10_000


@dataclass
class TokenBucket:
    """Remaining tokens for one admission key."""

    tokens: float
    last_ts: float


class TokenBucketRateLimiter:
    """In-memory token bucket keyed by an arbitrary string."""

    def __init__(
        self,
        capacity: int = 5,
        refill_per_second: float = 1.0,
        clock: Clock = time.monotonic,
    ) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        if refill_per_second <= 0:
            raise ValueError("refill_per_second must be positive")
        self.capacity = capacity
        self.refill_per_second = refill_per_second
        self._clock = clock
        self._buckets: dict[str, TokenBucket] = {}
        self._lock = threading.Lock()

    def consume(self, key: str, cost: float = 1) -> bool:
        """Take cost tokens from key's bucket.

        Returns:
            True if the tokens were available, False if the request is refused
        """
        with self._lock:
            now = self._clock()
            bucket = self._refill(key, now)
            if bucket.tokens >= cost:
                bucket.tokens -= cost
                return True
            return False

    def inspect(self, key: str) -> TokenBucket:
        """Return a snapshot of key's bucket after refilling."""
        with self._lock:
            bucket = self._refill(key, self._clock())
            return TokenBucket(tokens=bucket.tokens, last_ts=bucket.last_ts)

    def _refill(self, key: str, now: float) -> TokenBucket:
        bucket = self._buckets.get(key)
        if bucket is None:
            if len(self._buckets) >= MAX_TRACKED_KEYS:
                self._prune(now)
            bucket = TokenBucket(tokens=float(self.capacity), last_ts=now)
            self._buckets[key] = bucket
            return bucket

        elapsed = max(0.0, now - bucket.last_ts)
        bucket.tokens = min(
            float(self.capacity), bucket.tokens + elapsed * self.refill_per_second
        )
        bucket.last_ts = now
        return bucket

    def _prune(self, now: float) -> None:
        # A bucket idle long enough to refill completely is equivalent to a new one
        full_after = self.capacity / self.refill_per_second
        stale = [k for k, b in self._buckets.items() if now - b.last_ts >= full_after]
        for key in stale:
            del self._buckets[key]

    def __len__(self) -> int:
        return len(self._buckets)


@dataclass
class DedupCheck:
    """Result of a duplicate check."""

    duplicate: bool
    previous_outcome: dict[str, Any] | None = None


@dataclass
class _SeenEntry:
    seen_at: float
    outcome: dict[str, Any] | None = field(default=None)


class DuplicateSuppressor:
    """Remembers when each (operation, voter, answer) was last seen."""

    def __init__(self, window_seconds: float = 0.8, clock: Clock = time.monotonic) -> None:
        self.window_seconds = window_seconds
        self._clock = clock
        self._seen: dict[str, _SeenEntry] = {}
        self._lock = threading.Lock()

    def check(self, key: DedupKey) -> DedupCheck:
        """Check key and mark it as seen now if it is not a duplicate.

        A duplicate does not extend the window: only admitted requests
        refresh the timestamp.
        """
        with self._lock:
            now = self._clock()
            entry = self._seen.get(str(key))
            if entry is not None and now - entry.seen_at < self.window_seconds:
                return DedupCheck(duplicate=True, previous_outcome=entry.outcome)

            if len(self._seen) >= MAX_TRACKED_KEYS:
                self._prune(now)
            self._seen[str(key)] = _SeenEntry(seen_at=now)
            return DedupCheck(duplicate=False)

    def record(self, key: DedupKey, outcome: dict[str, Any]) -> None:
        """Remember the outcome of the admitted request for key."""
        with self._lock:
            entry = self._seen.get(str(key))
            if entry is not None:
                entry.outcome = outcome

    def forget(self, key: DedupKey) -> None:
        """Drop key so an identical retry is admitted immediately."""
        with self._lock:
            self._seen.pop(str(key), None)

    def _prune(self, now: float) -> None:
        stale = [k for k, e in self._seen.items() if now - e.seen_at >= self.window_seconds]
        for key in stale:
            del self._seen[key]

    def __len__(self) -> int:
        return len(self._seen)


class AdmissionGuard:
    """Rate limiter and duplicate suppressor evaluated in that order.

    Constructed once per process and handed to request handlers, so it can be
    replaced by a shared implementation without touching call sites.
    """

    def __init__(
        self,
        rate_limiter: TokenBucketRateLimiter,
        duplicate_suppressor: DuplicateSuppressor,
    ) -> None:
        self.rate_limiter = rate_limiter
        self.duplicate_suppressor = duplicate_suppressor

    @classmethod
    def from_settings(
        cls, settings: AdmissionSettings, clock: Clock = time.monotonic
    ) -> "AdmissionGuard":
        """Build a guard from admission settings."""
        return cls(
            rate_limiter=TokenBucketRateLimiter(
                capacity=settings.capacity,
                refill_per_second=settings.refill_per_second,
                clock=clock,
            ),
            duplicate_suppressor=DuplicateSuppressor(
                window_seconds=settings.dedup_window_seconds, clock=clock
            ),
        )

    def check_rate(self, admission_key: AdmissionKey, cost: float = 1) -> None:
        """Consume a token or refuse the request.

        Raises:
            AdmissionRejectedError: If the bucket is empty
        """
        if not self.rate_limiter.consume(str(admission_key), cost):
            logfire.warn("Rate limit exceeded", admission_key=str(admission_key))
            raise AdmissionRejectedError(str(admission_key))

    def admit(
        self, admission_key: AdmissionKey, dedup_key: DedupKey | None = None
    ) -> DedupCheck:
        """Run the rate limit, then duplicate suppression.

        Args:
            admission_key: Bucket to charge
            dedup_key: Identity of the request, or None to skip dedup

        Returns:
            The dedup verdict; callers short-circuit to success on duplicates

        Raises:
            AdmissionRejectedError: If the rate limit refuses the request
        """
        self.check_rate(admission_key)
        if dedup_key is None:
            return DedupCheck(duplicate=False)
        return self.check_duplicate(dedup_key)

    def check_duplicate(self, dedup_key: DedupKey) -> DedupCheck:
        """Mark dedup_key as seen, reporting whether it is a duplicate."""
        verdict = self.duplicate_suppressor.check(dedup_key)
        if verdict.duplicate:
            logfire.info("Duplicate request suppressed", dedup_key=str(dedup_key))
        return verdict

    def record_outcome(self, dedup_key: DedupKey, outcome: dict[str, Any]) -> None:
        """Store the outcome returned for later duplicates of dedup_key."""
        self.duplicate_suppressor.record(dedup_key, outcome)

    def release(self, dedup_key: DedupKey) -> None:
        """Forget dedup_key so the next identical request is admitted."""
        self.duplicate_suppressor.forget(dedup_key)
