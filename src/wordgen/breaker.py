from __future__ import annotations

import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, Tuple, TypeVar

from .config import BreakerSettings
from .errors import CircuitOpenError

logger = logging.getLogger(__name__)

T = TypeVar("T")

CLOSED = "closed"
OPEN = "open"
HALF_OPEN = "half_open"


class CircuitBreaker:
    """
    Stop calling a failing dependency until it has had time to recover.

    Call outcomes are kept for a rolling window. Once the window holds at
    least ``volume_threshold`` calls and the failure percentage reaches
    ``error_threshold_percentage`` the circuit opens and every call fails fast
    with CircuitOpenError. After ``reset_timeout_seconds`` a single probe is
    let through: success closes the circuit, failure opens it again.

    One breaker must be shared by every caller of the same provider.
    """

    def __init__(
        self,
        settings: BreakerSettings | None = None,
        *,
        name: str = "dictionary",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings or BreakerSettings()
        self._name = name
        self._clock = clock
        self._lock = threading.Lock()
        self._outcomes: Deque[Tuple[float, bool]] = deque()
        self._state = CLOSED
        self._opened_at = 0.0
        self._probe_in_flight = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> str:
        with self._lock:
            self._maybe_half_open()
            return self._state

    def call(self, func: Callable[..., T], *args: object, **kwargs: object) -> T:
        """Run func through the breaker, raising CircuitOpenError when open."""
        self._before_call()
        try:
            result = func(*args, **kwargs)
        except Exception:
            self._record(success=False)
            raise
        self._record(success=True)
        return result

    def reset(self) -> None:
        with self._lock:
            self._outcomes.clear()
            self._probe_in_flight = False
            self._transition(CLOSED)

    def _before_call(self) -> None:
        with self._lock:
            self._maybe_half_open()
            if self._state == OPEN:
                raise CircuitOpenError(f"Circuit '{self._name}' is open; call rejected.")
            if self._state == HALF_OPEN:
                if self._probe_in_flight:
                    raise CircuitOpenError(
                        f"Circuit '{self._name}' is half-open; probe already in flight."
                    )
                self._probe_in_flight = True

    def _record(self, success: bool) -> None:
        with self._lock:
            now = self._clock()
            if self._state == HALF_OPEN:
                self._probe_in_flight = False
                if success:
                    self._outcomes.clear()
                    self._transition(CLOSED)
                else:
                    self._open(now)
                return
            self._outcomes.append((now, success))
            self._prune(now)
            if self._state == CLOSED and self._should_open():
                self._open(now)

    def _should_open(self) -> bool:
        total = len(self._outcomes)
        if total == 0 or total < self._settings.volume_threshold:
            return False
        failures = sum(1 for _, ok in self._outcomes if not ok)
        return failures * 100.0 / total >= self._settings.error_threshold_percentage

    def _prune(self, now: float) -> None:
        horizon = now - self._settings.rolling_window_seconds
        while self._outcomes and self._outcomes[0][0] < horizon:
            self._outcomes.popleft()

    def _open(self, now: float) -> None:
        self._opened_at = now
        self._transition(OPEN)

    def _maybe_half_open(self) -> None:
        if (
            self._state == OPEN
            and self._clock() - self._opened_at >= self._settings.reset_timeout_seconds
        ):
            self._transition(HALF_OPEN)

    def _transition(self, state: str) -> None:
        if state == self._state:
            return
        self._state = state
        if state == OPEN:
            logger.warning(
                "Circuit '%s' opened (threshold %.0f%%)",
                self._name,
                self._settings.error_threshold_percentage,
            )
        else:
            logger.info("Circuit '%s' is now %s", self._name, state.replace("_", "-"))
