import math
from collections import defaultdict
from collections import deque
from collections.abc import Callable
from threading import RLock
from time import monotonic

SVG_RENDER_COST = 2
SUMMARY_COST = 1


class RenderBudgetExceeded(Exception):
    """Raised when a GitHub login has spent its render budget for the window."""

    def __init__(self, login: str, retry_after: int) -> None:
        super().__init__(f"render budget for {login} exhausted")
        self.login = login
        self.retry_after = retry_after


class RenderBudget:
    """Sliding-window render budget keyed by GitHub login.

    Every request charges a cost against the login whose calendar it draws, so
    one account cannot be re-rendered endlessly through many tokens or proxies.
    An SVG costs more than a summary because it also runs the template backend.
    """

    def __init__(
        self,
        budget: int = 30,
        window_seconds: int = 60,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self.budget = max(1, budget)
        self.window_seconds = max(1, window_seconds)
        self._clock = clock
        # Per login: (charged_at, cost) in charge order.
        self._charges: dict[str, deque[tuple[float, int]]] = defaultdict(deque)
        self._lock = RLock()

    def _expire(self, charges: deque[tuple[float, int]], now: float) -> None:
        cutoff = now - self.window_seconds
        while charges and charges[0][0] <= cutoff:
            charges.popleft()

    def spent(self, login: str) -> int:
        with self._lock:
            charges = self._charges[login.lower()]
            self._expire(charges, self._clock())
            return sum(cost for _, cost in charges)

    def charge(self, login: str, cost: int = 1) -> None:
        """Record a render for `login` or raise RenderBudgetExceeded."""

        now = self._clock()
        with self._lock:
            charges = self._charges[login.lower()]
            self._expire(charges, now)
            spent = sum(charge for _, charge in charges)

            if spent + cost > self.budget:
                raise RenderBudgetExceeded(
                    login, self._retry_after(charges, spent, cost, now)
                )

            charges.append((now, cost))

    def _retry_after(
        self, charges: deque[tuple[float, int]], spent: int, cost: int, now: float
    ) -> int:
        if cost > self.budget:
            return self.window_seconds
        for charged_at, charge in charges:
            spent -= charge
            if spent + cost <= self.budget:
                return max(1, math.ceil(charged_at + self.window_seconds - now))
        return self.window_seconds
