"""
In-memory rate limiting for share code redemption.

A 6-char code from a 32-symbol alphabet is guessable by brute force if
attempts are unlimited, so each student gets a bounded number of tries per
window. State is per process.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime, timedelta


class RateLimiter:
    """
    Sliding-window attempt counter keyed by an arbitrary string.
    """

    def __init__(self):
        # key -> attempt timestamps
        self._attempts: dict[str, list[datetime]] = defaultdict(list)

    def check_rate_limit(self, key: str, max_requests: int, window_minutes: int = 60) -> bool:
        """
        Record an attempt unless the key is already at its limit.

        Args:
            key: Identifier to rate limit (e.g. "redeem:<student id>")
            max_requests: Maximum attempts allowed in the window
            window_minutes: Window length in minutes

        Returns:
            True if the attempt is allowed, False if the limit is reached
        """
        now = datetime.now(UTC)
        cutoff = now - timedelta(minutes=window_minutes)

        recent = [ts for ts in self._attempts[key] if ts > cutoff]
        if len(recent) >= max_requests:
            self._attempts[key] = recent
            return False

        recent.append(now)
        self._attempts[key] = recent
        return True

    def reset(self, key: str) -> None:
        """Forget all attempts for a key."""
        self._attempts.pop(key, None)

    def cleanup_old_entries(self, max_age_hours: int = 2) -> int:
        """
        Drop attempts older than max_age_hours and keys left empty.

        Returns:
            Number of keys removed
        """
        cutoff = datetime.now(UTC) - timedelta(hours=max_age_hours)
        removed = 0
        for key in list(self._attempts.keys()):
            self._attempts[key] = [ts for ts in self._attempts[key] if ts > cutoff]
            if not self._attempts[key]:
                del self._attempts[key]
                removed += 1
        return removed


# Global rate limiter instance
rate_limiter = RateLimiter()
