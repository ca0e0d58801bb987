"""
In-process throttling of failed admin logins.

Failures are counted per client address and login identifier over a sliding
window. Once the count reaches the limit, further attempts are refused until
the oldest failure ages out. A successful login clears the counter.
"""
import hashlib
import math
import threading
import time
from collections import deque

from ..errors import RateLimitedError

LOGIN_MAX_FAILURES = 5
LOGIN_WINDOW_SECONDS = 60


class SlidingWindowLimiter:
    def __init__(self, max_failures: int, window_seconds: float) -> None:
        self.max_failures = max_failures
        self.window_seconds = window_seconds
        self._failures: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def _live_failures(self, key: str, now: float) -> deque[float]:
        failures = self._failures.get(key, deque())
        cutoff = now - self.window_seconds
        while failures and failures[0] <= cutoff:
            failures.popleft()
        if not failures:
            self._failures.pop(key, None)
        return failures

    def is_limited(self, key: str, now: float | None = None) -> bool:
        current = time.monotonic() if now is None else now
        with self._lock:
            return len(self._live_failures(key, current)) >= self.max_failures

    def retry_after(self, key: str, now: float | None = None) -> int:
        """Seconds until the oldest counted failure leaves the window."""
        current = time.monotonic() if now is None else now
        with self._lock:
            failures = self._live_failures(key, current)
            if not failures:
                return 0
            return max(1, math.ceil(failures[0] + self.window_seconds - current))

    def record_failure(self, key: str, now: float | None = None) -> None:
        current = time.monotonic() if now is None else now
        with self._lock:
            failures = self._live_failures(key, current)
            failures.append(current)
            self._failures[key] = failures

    def reset(self, key: str) -> None:
        with self._lock:
            self._failures.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._failures.clear()


login_limiter = SlidingWindowLimiter(
    max_failures=LOGIN_MAX_FAILURES,
    window_seconds=LOGIN_WINDOW_SECONDS,
)


def login_key(user_id: str, client_ip: str | None = None) -> str:
    # Identifiers are hashed so raw login names never sit in memory as keys
    digest = hashlib.sha256(user_id.strip().lower().encode("utf-8")).hexdigest()
    return f"login:{client_ip or 'unknown'}:{digest}"


def check_login_rate_limit(user_id: str, client_ip: str | None = None) -> str:
    """Return the limiter key for this attempt, or raise when it is throttled."""
    key = login_key(user_id, client_ip)
    if login_limiter.is_limited(key):
        raise RateLimitedError(details={"retry_after": login_limiter.retry_after(key)})
    return key


def record_login_failure(key: str) -> None:
    login_limiter.record_failure(key)


def reset_login_limit(key: str) -> None:
    login_limiter.reset(key)
