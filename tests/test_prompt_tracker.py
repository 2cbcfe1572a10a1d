"""Tests for the per-user prompt tracker."""

import asyncio

import pytest
from hypothesis import given, strategies as st, settings

from imagebot.services.prompt_tracker import PromptTracker


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestPromptTracker:

    @pytest.mark.asyncio
    async def test_idle_user_is_not_waiting(self):
        tracker = PromptTracker()

        assert await tracker.is_waiting(1) is False
        assert await tracker.consume_if_waiting(1) is False
        assert await tracker.cancel(1) is False

    @pytest.mark.asyncio
    async def test_consume_clears_pending_prompt(self):
        tracker = PromptTracker()
        await tracker.begin_waiting(1)

        assert await tracker.is_waiting(1) is True
        assert await tracker.consume_if_waiting(1) is True
        assert await tracker.is_waiting(1) is False
        assert await tracker.consume_if_waiting(1) is False
        assert len(tracker) == 0

    @pytest.mark.asyncio
    async def test_begin_waiting_twice_keeps_single_entry(self):
        tracker = PromptTracker()
        await tracker.begin_waiting(1)
        await tracker.begin_waiting(1)

        assert len(tracker) == 1
        assert await tracker.consume_if_waiting(1) is True
        assert await tracker.consume_if_waiting(1) is False

    @pytest.mark.asyncio
    async def test_cancel_reports_whether_something_was_pending(self):
        tracker = PromptTracker()
        await tracker.begin_waiting(1)

        assert await tracker.cancel(1) is True
        assert await tracker.cancel(1) is False
        assert await tracker.consume_if_waiting(1) is False

    @pytest.mark.asyncio
    async def test_users_are_independent(self):
        tracker = PromptTracker()
        await tracker.begin_waiting(1)

        assert await tracker.consume_if_waiting(2) is False
        assert await tracker.cancel(2) is False
        assert await tracker.is_waiting(1) is True

    @pytest.mark.asyncio
    async def test_concurrent_consume_succeeds_once(self):
        tracker = PromptTracker()
        await tracker.begin_waiting(42)

        results = await asyncio.gather(
            *(tracker.consume_if_waiting(42) for _ in range(20))
        )

        assert results.count(True) == 1
        assert await tracker.is_waiting(42) is False

    @pytest.mark.asyncio
    async def test_no_timeout_by_default(self):
        clock = FakeClock()
        tracker = PromptTracker(clock=clock)
        await tracker.begin_waiting(1)

        clock.now += 10 ** 6

        assert await tracker.consume_if_waiting(1) is True

    @pytest.mark.asyncio
    async def test_pending_prompt_expires_after_timeout(self):
        clock = FakeClock()
        tracker = PromptTracker(timeout=60, clock=clock)
        await tracker.begin_waiting(1)

        clock.now += 30
        assert await tracker.is_waiting(1) is True

        clock.now += 31
        assert await tracker.is_waiting(1) is False
        assert len(tracker) == 0
        assert await tracker.consume_if_waiting(1) is False

    @pytest.mark.asyncio
    async def test_expired_prompt_is_not_consumed_or_cancelled(self):
        clock = FakeClock()
        tracker = PromptTracker(timeout=5, clock=clock)

        await tracker.begin_waiting(1)
        clock.now += 6
        assert await tracker.consume_if_waiting(1) is False

        await tracker.begin_waiting(2)
        clock.now += 6
        assert await tracker.cancel(2) is False
        assert len(tracker) == 0

    @pytest.mark.asyncio
    async def test_new_prompt_restarts_timeout(self):
        clock = FakeClock()
        tracker = PromptTracker(timeout=10, clock=clock)
        await tracker.begin_waiting(1)

        clock.now += 8
        await tracker.begin_waiting(1)
        clock.now += 8

        assert await tracker.consume_if_waiting(1) is True


class TestPromptTrackerProperties:
    """For any sequence of operations, the tracker agrees with a plain set."""

    @pytest.mark.asyncio
    @settings(max_examples=100)
    @given(
        operations=st.lists(
            st.tuples(
                st.sampled_from(["begin", "consume", "cancel"]),
                st.integers(min_value=1, max_value=5),
            ),
            max_size=40,
        )
    )
    async def test_matches_set_model(self, operations):
        tracker = PromptTracker()
        model = set()

        for operation, user_id in operations:
            if operation == "begin":
                await tracker.begin_waiting(user_id)
                model.add(user_id)
            else:
                method = tracker.consume_if_waiting if operation == "consume" else tracker.cancel
                assert await method(user_id) is (user_id in model)
                model.discard(user_id)

        assert len(tracker) == len(model)
        for user_id in range(1, 6):
            assert await tracker.is_waiting(user_id) is (user_id in model)
