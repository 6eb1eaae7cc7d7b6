"""Tests for readiness polling."""

import pytest

from conftest import FAILED, PENDING, READY
from media_bridge import (
    AssetReadinessPoller,
    CancellationToken,
    PipelineCancelledError,
    PollPolicy,
    PollTimeoutError,
    ProcessingFailedError,
    TransportError,
)
from media_bridge.types import AssetHandle


@pytest.fixture
def handle():
    return AssetHandle(name="files/clip.mp4", uri="", mime_type="video/mp4")


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestAwaitReady:
    """Test AssetReadinessPoller.await_ready."""

    @pytest.mark.asyncio
    async def test_polls_until_ready(self, service, sleep, handle):
        """[Pending, Pending, Ready] takes exactly three status queries."""
        service.script_status(handle.name, [PENDING, PENDING, READY])
        poller = AssetReadinessPoller(service, sleep=sleep)

        result = await poller.await_ready(handle)

        assert result is handle
        assert result.state is READY
        assert service.status_calls == [handle.name] * 3
        assert sleep.calls == [5.0, 5.0]

    @pytest.mark.asyncio
    async def test_ready_on_first_query_does_not_sleep(self, service, sleep, handle):
        service.script_status(handle.name, [READY])
        poller = AssetReadinessPoller(service, sleep=sleep)

        await poller.await_ready(handle)

        assert len(service.status_calls) == 1
        assert sleep.calls == []

    @pytest.mark.asyncio
    async def test_failed_state_raises(self, service, sleep, handle):
        """A terminal FAILED state is reported, not retried."""
        service.script_status(handle.name, [PENDING, FAILED])
        poller = AssetReadinessPoller(service, sleep=sleep)

        with pytest.raises(ProcessingFailedError) as exc_info:
            await poller.await_ready(handle)

        assert exc_info.value.handle_name == handle.name
        assert handle.state is FAILED
        assert len(service.status_calls) == 2

    @pytest.mark.asyncio
    async def test_custom_interval(self, service, sleep, handle):
        service.script_status(handle.name, [PENDING, READY])
        poller = AssetReadinessPoller(service, policy=PollPolicy(interval=0.25), sleep=sleep)

        await poller.await_ready(handle)

        assert sleep.calls == [0.25]

    @pytest.mark.asyncio
    async def test_status_query_transport_failure(self, service, sleep, handle):
        service.status_error = TimeoutError("slow")
        poller = AssetReadinessPoller(service, sleep=sleep)

        with pytest.raises(TransportError):
            await poller.await_ready(handle)


class TestCancellation:
    """A cancelled token stops further status queries."""

    @pytest.mark.asyncio
    async def test_cancelled_before_start_issues_no_query(self, service, sleep, handle):
        token = CancellationToken()
        token.cancel()
        poller = AssetReadinessPoller(service, sleep=sleep)

        with pytest.raises(PipelineCancelledError):
            await poller.await_ready(handle, token=token)

        assert service.status_calls == []

    @pytest.mark.asyncio
    async def test_cancel_during_sleep_stops_before_next_query(self, service, handle):
        service.script_status(handle.name, [PENDING, PENDING, READY])
        token = CancellationToken()

        async def cancelling_sleep(_seconds):
            token.cancel()

        poller = AssetReadinessPoller(service, sleep=cancelling_sleep)

        with pytest.raises(PipelineCancelledError):
            await poller.await_ready(handle, token=token)

        assert len(service.status_calls) == 1


class TestPollPolicyBounds:
    """Optional bounds on otherwise unbounded polling."""

    @pytest.mark.asyncio
    async def test_max_attempts(self, service, sleep, handle):
        service.script_status(handle.name, [PENDING] * 10)
        poller = AssetReadinessPoller(service, policy=PollPolicy(max_attempts=3), sleep=sleep)

        with pytest.raises(PollTimeoutError):
            await poller.await_ready(handle)

        assert len(service.status_calls) == 3
        assert len(sleep.calls) == 2

    @pytest.mark.asyncio
    async def test_max_duration(self, service, handle):
        service.script_status(handle.name, [PENDING] * 10)
        clock = FakeClock()

        async def advancing_sleep(seconds):
            clock.now += seconds

        poller = AssetReadinessPoller(
            service,
            policy=PollPolicy(interval=5.0, max_duration=12.0),
            sleep=advancing_sleep,
            clock=clock,
        )

        with pytest.raises(PollTimeoutError):
            await poller.await_ready(handle)

        # queries at t=0, 5 and 10; another sleep would end past 12s
        assert len(service.status_calls) == 3

    def test_invalid_policy_values(self):
        with pytest.raises(ValueError):
            PollPolicy(interval=-1)
        with pytest.raises(ValueError):
            PollPolicy(max_attempts=0)
        with pytest.raises(ValueError):
            PollPolicy(max_duration=-0.5)
