import click
from datetime import datetime
from .base import BaseLogger
import sys


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for CLI usage."""
    
    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "colorize": True,
                "format": "<cyan>{time:YYYY-MM-DD HH:mm:ss.SSS}</cyan> | "
                         "<level>{level: <8}</level> | "
                         "<white>{message}</white>",
                "level": log_level
            }]
        )
    
    def log_probe(self, endpoint: str):
        self.logger.debug(click.style(f"Probing {endpoint}", fg="blue"))

    def log_status(self, status_code: int):
        if status_code >= 500:
            color = "red"
        elif status_code == 404:
            # steady state, no termination scheduled
            color = "white"
        elif status_code >= 400:
            color = "yellow"
        elif status_code >= 200:
            color = "green"
        else:
            color = "white"
            
        self.logger.debug(click.style(f"Status: {status_code}", fg=color))

    def log_notice(self, termination_time: datetime):
        self.logger.warning(click.style(
            f"Instance scheduled for termination at {termination_time.isoformat()}",
            fg="magenta",
            bold=True
        ))

    def log_error(self, message: str):
        self.logger.error(click.style(message, fg="red", bold=True))

    def log_warning(self, message: str):
        self.logger.warning(click.style(message, fg="yellow", bold=True))

    def log_info(self, message: str):
        self.logger.info(click.style(message, fg="white"))

    def log_debug(self, message: str):
        self.logger.debug(click.style(message, fg="blue"))
