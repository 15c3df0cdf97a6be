import asyncio
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Optional

import aiohttp

from .result import PollResult, PollStatus

if TYPE_CHECKING:
    from .notifier import Notifier


class SubscriptionState(str, Enum):
    IDLE = "idle"
    POLLING = "polling"
    DELIVERED = "delivered"
    CLOSED = "closed"


class Subscription:
    """A live polling session delivering at most one termination notice.

    The background task is the only writer of the conduit. Consumers read it
    with ``wait()``, which returns the termination time, or None once the
    subscription closed without one (probe failure or ``cancel()``).
    """

    def __init__(self, notifier: 'Notifier'):
        self.notifier = notifier
        self.config = notifier.config
        self.logger = notifier.logger
        self.state = SubscriptionState.IDLE
        self.probe_count = 0
        self.last_result: Optional[PollResult] = None
        self._conduit: asyncio.Future = asyncio.get_running_loop().create_future()
        self._stop = asyncio.Event()
        self._task: Optional[asyncio.Task] = None
        self._client: Optional[aiohttp.ClientSession] = None

    async def start(self) -> None:
        """Run the initial probe and start polling.

        Raises:
            RuntimeError: If the subscription was already started
            UnsupportedEnvironmentError: If the metadata endpoint is unreachable
            ProbeError: If the initial probe failed for any other reason
        """
        if self.state is not SubscriptionState.IDLE:
            raise RuntimeError(f"Subscription already started (state: {self.state.value})")

        self._client = self.notifier.create_session()
        try:
            result = await self._probe()
        except BaseException:
            self._finish(SubscriptionState.CLOSED)
            await self._release()
            raise

        if result.status is PollStatus.ERROR:
            self._finish(SubscriptionState.CLOSED)
            await self._release()
            raise result.error

        self.state = SubscriptionState.POLLING
        if result.status is PollStatus.SET:
            self._deliver(result.termination_time)
            await self._release()
            return

        self.logger.log_info(
            f"Watching {self.config.endpoint} every {self.config.poll_interval}s for a termination notice"
        )
        self._task = asyncio.create_task(self._poll())

    async def _poll(self) -> None:
        loop = asyncio.get_running_loop()
        interval = self.config.poll_interval
        next_tick = loop.time() + interval
        try:
            while self.state is SubscriptionState.POLLING:
                if await self._wait_for_tick(next_tick - loop.time()):
                    break

                result = await self._probe()
                if self.state is not SubscriptionState.POLLING:
                    # cancelled while the probe was in flight
                    break

                if result.status is PollStatus.SET:
                    self._deliver(result.termination_time)
                    break
                if result.status is PollStatus.ERROR:
                    self.logger.log_warning(f"Stopped polling for termination notice: {result.error}")
                    self._finish(SubscriptionState.CLOSED)
                    break

                # Skip ticks missed by a probe that overran its period
                next_tick += interval
                now = loop.time()
                if next_tick <= now:
                    next_tick += interval * ((now - next_tick) // interval + 1)
        except Exception as err:
            # Nobody awaits this task, the conduit closes below like any other failure
            self.logger.log_error(f"Unexpected error while polling: {str(err)}")
            self.last_result = PollResult.failed(err)
        finally:
            if self.state is SubscriptionState.POLLING:
                self._finish(SubscriptionState.CLOSED)
            await self._release()

    async def _wait_for_tick(self, delay: float) -> bool:
        """Sleep until the next tick. Returns True if a stop was requested."""
        try:
            await asyncio.wait_for(self._stop.wait(), timeout=max(0.0, delay))
            return True
        except asyncio.TimeoutError:
            return self._stop.is_set()

    async def _probe(self) -> PollResult:
        self.probe_count += 1
        result = await self.notifier.probe(self._client)
        self.last_result = result
        return result

    def _deliver(self, termination_time: datetime) -> None:
        if self._conduit.done():
            return
        self.state = SubscriptionState.DELIVERED
        self._conduit.set_result(termination_time)
        self._stop.set()
        self.logger.log_notice(termination_time)

    def _finish(self, state: SubscriptionState) -> None:
        self.state = state
        if not self._conduit.done():
            self._conduit.set_result(None)
        self._stop.set()

    async def _release(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    def cancel(self) -> None:
        """Stop polling without delivering a value.

        An in-flight probe is not interrupted, its result is discarded.
        Does nothing once the subscription delivered or closed.
        """
        if self.state in (SubscriptionState.DELIVERED, SubscriptionState.CLOSED):
            return
        self.logger.log_info("Termination notice subscription cancelled")
        self._finish(SubscriptionState.CLOSED)

    async def aclose(self) -> None:
        """Cancel the subscription and wait for the background task to end."""
        self.cancel()
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def wait(self) -> Optional[datetime]:
        """Wait for the termination notice.

        Returns:
            Optional[datetime]: The UTC termination time, or None if the
            subscription closed without one
        """
        return await asyncio.shield(self._conduit)

    def done(self) -> bool:
        return self._conduit.done()

    async def __aenter__(self) -> 'Subscription':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
