"""Tracks which users are expected to send an image prompt next.

Each user is either idle or awaiting a prompt. ``begin_waiting`` moves a user
to awaiting; ``consume_if_waiting`` and ``cancel`` move them back. Generation
itself happens after the user is idle again, so a new ``/prompt`` during a
running generation starts an independent cycle.
"""

import asyncio
import logging
import time
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)


class PromptTracker:
    """In-memory set of users awaiting a prompt, safe for concurrent handlers.

    Args:
        timeout: Seconds after which a pending prompt silently expires.
            None keeps it until it is consumed or cancelled.
        clock: Monotonic time source.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.timeout = timeout
        self._clock = clock
        self._pending: Dict[int, float] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._pending)

    def _expired(self, started_at: float) -> bool:
        return self.timeout is not None and self._clock() - started_at > self.timeout

    async def begin_waiting(self, user_id: int) -> None:
        """Mark the user's next free-text message as a prompt."""
        async with self._lock:
            self._pending[user_id] = self._clock()
        logger.debug(f"User {user_id} is awaiting a prompt")

    async def is_waiting(self, user_id: int) -> bool:
        async with self._lock:
            started_at = self._pending.get(user_id)
            if started_at is None:
                return False
            if self._expired(started_at):
                del self._pending[user_id]
                logger.info(f"Pending prompt of user {user_id} expired")
                return False
            return True

    async def consume_if_waiting(self, user_id: int) -> bool:
        """
        Atomically check and clear the user's pending prompt.

        Of several concurrent calls for the same user, at most one returns True.
        """
        async with self._lock:
            started_at = self._pending.pop(user_id, None)
        if started_at is None:
            return False
        if self._expired(started_at):
            logger.info(f"Pending prompt of user {user_id} expired")
            return False
        return True

    async def cancel(self, user_id: int) -> bool:
        """Clear the user's pending prompt; returns whether one was pending."""
        async with self._lock:
            started_at = self._pending.pop(user_id, None)
        if started_at is None or self._expired(started_at):
            return False
        logger.debug(f"User {user_id} cancelled the pending prompt")
        return True
