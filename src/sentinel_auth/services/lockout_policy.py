"""Brute-force lockout policy.

Pure decision logic over ``(failed_attempts, locked_until, now)``. It never
touches storage; callers persist the returned state through the store's
conditional update so that concurrent failures cannot double-lock.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

DEFAULT_THRESHOLD = 5
DEFAULT_DURATION = timedelta(minutes=15)


@dataclass(frozen=True)
class LockoutState:
    """Counter and lock timestamp of one account."""

    failed_attempts: int = 0
    locked_until: datetime | None = None


@dataclass(frozen=True)
class LockoutDecision:
    """Outcome of a failed authentication attempt."""

    state: LockoutState
    locked_now: bool


@dataclass(frozen=True)
class LockoutPolicy:
    """Lock an account for ``duration`` after ``threshold`` consecutive failures."""

    threshold: int = DEFAULT_THRESHOLD
    duration: timedelta = DEFAULT_DURATION

    def __post_init__(self) -> None:
        if self.threshold < 1:
            msg = "Lockout threshold must be at least 1"
            raise ValueError(msg)
        if self.duration <= timedelta(0):
            msg = "Lockout duration must be positive"
            raise ValueError(msg)

    def is_blocked(self, locked_until: datetime | None, now: datetime) -> bool:
        return locked_until is not None and locked_until > now

    def observe(self, state: LockoutState, now: datetime) -> LockoutState:
        """Return the effective state at ``now``.

        A lock whose window has passed is treated as if the account had
        never failed: the counter starts over from zero.
        """
        if state.locked_until is not None and state.locked_until <= now:
            return LockoutState()
        return state

    def register_failure(self, state: LockoutState, now: datetime) -> LockoutDecision:
        """Count one failed password check.

        A blocked account is returned unchanged; the lock is never extended
        by attempts made while it is active.
        """
        if self.is_blocked(state.locked_until, now):
            return LockoutDecision(state=state, locked_now=False)

        attempts = self.observe(state, now).failed_attempts + 1
        if attempts >= self.threshold:
            return LockoutDecision(
                state=LockoutState(attempts, now + self.duration),
                locked_now=True,
            )
        return LockoutDecision(state=LockoutState(attempts, None), locked_now=False)

    def register_success(self) -> LockoutState:
        return LockoutState()
