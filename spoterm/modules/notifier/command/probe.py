import asyncio

from ...logging import BaseLogger
from ..config import NotifierConfig
from ..notifier import Notifier
from ..result import PollResult, PollStatus


class ProbeCommand:
    """Command class for a single probe of the metadata endpoint."""

    def __init__(self, logger: BaseLogger, config: NotifierConfig):
        self.logger = logger
        self.config = config

    def _log_result(self, result: PollResult) -> None:
        if result.status is PollStatus.SET:
            self.logger.log_notice(result.termination_time)
        elif result.status is PollStatus.NOT_SET:
            self.logger.log_info("No termination scheduled")
        else:
            self.logger.log_error(f"Probe failed: {str(result.error)}")

    def run(self) -> int:
        """Probe once. Returns 1 if the probe failed, 0 otherwise."""
        result = asyncio.run(Notifier(self.config, self.logger).probe())
        self._log_result(result)
        return 1 if result.status is PollStatus.ERROR else 0
