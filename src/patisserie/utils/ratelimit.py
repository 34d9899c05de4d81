"""Per-address request limits backed by the ``limits`` library.

Hits are counted in a moving window held in ``limits``' in-process memory
storage, which expires stale keys on its own.
"""

from limits import RateLimitItem, parse
from limits.storage import MemoryStorage, Storage
from limits.strategies import MovingWindowRateLimiter


class RateLimitExceeded(Exception):
    def __init__(self, message: str, retry_after: str) -> None:
        super().__init__(message)
        self.message = message
        self.retry_after = retry_after


class AddressRateLimit:
    """Allow ``limit`` (for example ``"3/15 minutes"``) hits per client address."""

    def __init__(
        self,
        name: str,
        limit: str,
        message: str,
        retry_after: str,
        storage: Storage | None = None,
    ) -> None:
        self.name = name
        self.item: RateLimitItem = parse(limit)
        self.message = message
        self.retry_after = retry_after
        self.storage = storage or MemoryStorage()
        self._limiter = MovingWindowRateLimiter(self.storage)

    def hit(self, address: str) -> None:
        if not self._limiter.hit(self.item, self.name, address):
            raise RateLimitExceeded(self.message, self.retry_after)

    def remaining(self, address: str) -> int:
        return self._limiter.get_window_stats(self.item, self.name, address).remaining

    def reset(self) -> None:
        self.storage.reset()


contact_rate_limit = AddressRateLimit(
    "contact",
    "3/15 minutes",
    message="Too many contact submissions from this IP, please try again later.",
    retry_after="15 minutes",
)
