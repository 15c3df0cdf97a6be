import asyncio
from typing import Optional

import aiohttp
from aiohttp import ClientTimeout

from .config import NotifierConfig
from .errors import ProbeError, ResponseStatusError, UnsupportedEnvironmentError
from .result import PollResult, parse_termination_time
from .subscription import Subscription
from ..logging import BaseLogger, NullLogger


class Notifier:
    """Polls the instance metadata endpoint for a spot termination time."""

    # Termination time not scheduled yet
    NOT_SET_STATUS: int = 404

    # Metadata item present, body holds the termination time
    SET_STATUS: int = 200

    def __init__(
        self,
        config: Optional[NotifierConfig] = None,
        logger: Optional[BaseLogger] = None,
    ):
        """Initialize the notifier.
        
        Args:
            config: Endpoint, poll interval and probe timeout. Defaults to the
                EC2 metadata endpoint polled every 5 seconds.
            logger: Logger instance for probes and notices. Defaults to a
                logger that discards everything.
        """
        self.config = config or NotifierConfig()
        self.logger = logger or NullLogger()

    def create_session(self) -> aiohttp.ClientSession:
        """Create an HTTP session bounded by the configured probe timeout.
        
        Returns:
            aiohttp.ClientSession: A new session, owned by the caller
        """
        return aiohttp.ClientSession(timeout=ClientTimeout(total=self.config.timeout))

    async def probe(self, client: Optional[aiohttp.ClientSession] = None) -> PollResult:
        """Probe the metadata endpoint once.
        
        Network and HTTP failures are reported through the returned result,
        never raised.
        
        Args:
            client: Session to send the request with. A temporary session is
                opened and closed when omitted.
            
        Returns:
            PollResult: NOT_SET on 404 or a body that is not a timestamp,
            SET with the UTC termination time, or ERROR with the cause
        """
        if client is None:
            async with self.create_session() as temporary_client:
                return await self._probe(temporary_client)
        return await self._probe(client)

    async def _probe(self, client: aiohttp.ClientSession) -> PollResult:
        endpoint = self.config.endpoint
        self.logger.log_probe(endpoint)
        try:
            async with client.get(endpoint) as response:
                self.logger.log_status(response.status)

                if response.status == self.NOT_SET_STATUS:
                    return PollResult.not_set()

                if response.status != self.SET_STATUS:
                    error = ResponseStatusError(response.status)
                    self.logger.log_error(f"Unexpected response from {endpoint}: {error}")
                    return PollResult.failed(error)

                # The server answered, so a failure from here on says
                # nothing about the environment
                try:
                    body = await response.read()
                except (asyncio.TimeoutError, aiohttp.ClientError) as err:
                    error_msg = f"Reading termination time from {endpoint} failed: {str(err) or type(err).__name__}"
                    self.logger.log_error(error_msg)
                    return PollResult.failed(ProbeError(error_msg))
        except asyncio.TimeoutError as err:
            # off EC2 the link-local address usually just times out
            return self._unsupported_environment(f"request to {endpoint} timed out after {self.config.timeout}s", err)
        except aiohttp.ClientSSLError as err:
            error_msg = f"SSL error probing {endpoint}: {str(err)}"
            self.logger.log_error(error_msg)
            return PollResult.failed(ProbeError(error_msg))
        except aiohttp.ClientConnectorError as err:
            return self._unsupported_environment(str(err), err)
        except aiohttp.ClientError as err:
            error_msg = f"Probe of {endpoint} failed: {str(err)}"
            self.logger.log_error(error_msg)
            return PollResult.failed(ProbeError(error_msg))

        # The value may be present without being a time yet, so a parse
        # failure is not fatal
        termination_time = parse_termination_time(body.decode("utf-8", errors="replace"))
        if termination_time is None:
            self.logger.log_debug(f"Ignoring termination-time value that is not a timestamp: {body[:64]!r}")
            return PollResult.not_set()
        return PollResult.set(termination_time)

    def _unsupported_environment(self, reason: str, cause: Exception) -> PollResult:
        error = UnsupportedEnvironmentError(f"must run on EC2 instance: {reason}")
        error.__cause__ = cause
        self.logger.log_error(str(error))
        return PollResult.failed(error)

    async def subscribe(self) -> Subscription:
        """Subscribe to the termination notice.
        
        Probes once before returning so that configuration and environment
        problems surface here instead of inside the background loop.
        
        Returns:
            Subscription: A subscription polling in the background, or one
            already delivered if the termination time was set
            
        Raises:
            UnsupportedEnvironmentError: If the metadata endpoint is unreachable
            ProbeError: If the initial probe failed for any other reason
        """
        subscription = Subscription(self)
        await subscription.start()
        return subscription


async def subscribe(
    config: Optional[NotifierConfig] = None,
    logger: Optional[BaseLogger] = None,
) -> Subscription:
    """Shortcut for ``Notifier(config, logger).subscribe()``."""
    return await Notifier(config, logger).subscribe()
