import sys
from datetime import datetime
from .base import BaseLogger


class JsonLogger(BaseLogger):
    """Logger that outputs JSON for machine parsing."""
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "serialize": True,  # JSON output
                "format": "{time} | {level} | {message}",
                "level": log_level
            }]
        )
    
    def log_probe(self, endpoint: str):
        self.logger.bind(type="probe", endpoint=endpoint).debug("probe")

    def log_status(self, status_code: int):
        self.logger.bind(type="status", code=status_code).debug("status")

    def log_notice(self, termination_time: datetime):
        self.logger.bind(
            type="notice",
            termination_time=termination_time.isoformat()
        ).warning("termination scheduled")

    def log_error(self, message: str):
        self.logger.bind(type="error").error(message)

    def log_warning(self, message: str):
        self.logger.bind(type="warning").warning(message)

    def log_info(self, message: str):
        self.logger.bind(type="info").info(message)

    def log_debug(self, message: str):
        self.logger.bind(type="debug").debug(message)
