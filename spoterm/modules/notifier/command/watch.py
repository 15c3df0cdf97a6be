from typing import Optional

from ...logging import BaseLogger
from ...shutdown import ShutdownCoordinator
from ..config import NotifierConfig
from ..errors import ProbeError, UnsupportedEnvironmentError
from ..notifier import Notifier


class WatchCommand:
    """Command class that blocks until a termination notice arrives."""

    EXIT_NOTICE = 0
    EXIT_CLOSED = 1
    EXIT_SUBSCRIBE_FAILED = 2
    EXIT_INTERRUPTED = 130

    def __init__(
        self,
        logger: BaseLogger,
        config: NotifierConfig,
        coordinator: Optional[ShutdownCoordinator] = None
    ):
        """
        Initialize the watch command.
        
        Args:
            logger: Logger instance
            config: Endpoint, poll interval and probe timeout
            coordinator: Coordinator that cancels the subscription on
                SIGINT/SIGTERM, created when omitted
        """
        self.logger = logger
        self.config = config
        self.coordinator = coordinator or ShutdownCoordinator(
            logger,
            shutdown_timeout=config.timeout + 1
        )

    async def watch(self) -> int:
        """Subscribe and wait for the notice. Returns the process exit code."""
        notifier = Notifier(self.config, self.logger)
        try:
            subscription = await notifier.subscribe()
        except UnsupportedEnvironmentError as err:
            self.logger.log_error(f"Cannot watch for termination notices: {str(err)}")
            return self.EXIT_SUBSCRIBE_FAILED
        except ProbeError as err:
            self.logger.log_error(f"Initial probe failed: {str(err)}")
            return self.EXIT_SUBSCRIBE_FAILED

        self.coordinator.register_handler("cancel_subscription", subscription.aclose)

        termination_time = await subscription.wait()
        if termination_time is None:
            self.logger.log_error("Subscription closed without a termination notice")
            return self.EXIT_CLOSED
        return self.EXIT_NOTICE

    def run(self) -> int:
        """Run the watch loop with signal handling and return the exit code."""
        exit_code = self.coordinator.run_async_with_signals(self.watch())
        if exit_code is None:
            self.logger.log_info("Stopped watching before a termination notice arrived")
            return self.EXIT_INTERRUPTED
        return exit_code
