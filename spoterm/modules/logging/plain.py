import sys
from datetime import datetime
from .base import BaseLogger


class PlainLogger(BaseLogger):
    """Logger that outputs plain text, suitable for CI/file output."""
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "format": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
                "colorize": False,
                "level": log_level
            }]
        )
    
    def log_probe(self, endpoint: str):
        self.logger.debug(f"Probing {endpoint}")

    def log_status(self, status_code: int):
        self.logger.debug(f"Status: {status_code}")

    def log_notice(self, termination_time: datetime):
        self.logger.warning(f"Instance scheduled for termination at {termination_time.isoformat()}")

    def log_error(self, message: str):
        self.logger.error(message)

    def log_warning(self, message: str):
        self.logger.warning(message)

    def log_info(self, message: str):
        self.logger.info(message)

    def log_debug(self, message: str):
        self.logger.debug(message)
