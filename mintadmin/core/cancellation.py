"""Cooperative cancellation for long-running deployments"""

import threading
import time
from typing import Callable, Optional

from mintadmin.exceptions import DeploymentCancelledError


class CancellationToken:
    """
    Cancellation signal threaded through a deployment.

    The token is cancelled either explicitly via cancel() or implicitly when
    its deadline passes. Every blocking point in the deployer checks it, and
    sleep() never waits past a cancellation or the deadline.
    """

    def __init__(
        self,
        deadline: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize token

        Args:
            deadline: Absolute clock() value after which the token counts as
                cancelled (None for no deadline)
            clock: Monotonic clock, injectable for tests
        """
        self._event = threading.Event()
        self._deadline = deadline
        self._clock = clock

    @classmethod
    def with_timeout(
        cls, seconds: Optional[float], clock: Callable[[], float] = time.monotonic
    ) -> "CancellationToken":
        """Create a token that expires seconds from now (None or 0 never expires)."""
        if not seconds:
            return cls(clock=clock)
        return cls(deadline=clock() + seconds, clock=clock)

    def cancel(self) -> None:
        """Signal cancellation. Safe to call from another thread."""
        self._event.set()

    @property
    def deadline_exceeded(self) -> bool:
        return self._deadline is not None and self._clock() >= self._deadline

    @property
    def cancelled(self) -> bool:
        return self._event.is_set() or self.deadline_exceeded

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, None when there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    def raise_if_cancelled(self, stack_name: Optional[str] = None) -> None:
        """
        Raise if the token was cancelled or its deadline passed.

        Raises:
            DeploymentCancelledError: With reason "cancelled" or
                "deadline exceeded"
        """
        if self._event.is_set():
            raise DeploymentCancelledError("cancelled", stack_name)
        if self.deadline_exceeded:
            raise DeploymentCancelledError("deadline exceeded", stack_name)

    def sleep(self, seconds: float, stack_name: Optional[str] = None) -> None:
        """
        Wait up to seconds, returning early on cancellation.

        Raises:
            DeploymentCancelledError: If cancelled before or during the wait
        """
        self.raise_if_cancelled(stack_name)

        timeout = seconds
        remaining = self.remaining()
        if remaining is not None:
            timeout = min(timeout, remaining)

        self._event.wait(timeout)
        self.raise_if_cancelled(stack_name)
