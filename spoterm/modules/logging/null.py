from datetime import datetime
from .base import BaseLogger


class NullLogger(BaseLogger):
    """Logger that discards everything.

    Used by the notifier when embedded in a host process that did not hand
    over a logger, so loguru's handlers are never reconfigured.
    """

    def log_probe(self, endpoint: str):
        pass

    def log_status(self, status_code: int):
        pass

    def log_notice(self, termination_time: datetime):
        pass

    def log_error(self, message: str):
        pass

    def log_warning(self, message: str):
        pass

    def log_info(self, message: str):
        pass

    def log_debug(self, message: str):
        pass
