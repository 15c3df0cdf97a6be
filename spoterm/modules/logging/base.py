from abc import ABC, abstractmethod
from datetime import datetime
from loguru import logger


class BaseLogger(ABC):
    """Abstract base class for loggers."""
    
    def __init__(self, log_level: str = "INFO"):
        self.logger = logger
        self.log_level = log_level
    
    @abstractmethod
    def log_probe(self, endpoint: str):
        """Log a probe against the metadata endpoint."""
        pass

    @abstractmethod
    def log_status(self, status_code: int):
        """Log a response status code."""
        pass

    @abstractmethod
    def log_notice(self, termination_time: datetime):
        """Log a received termination notice."""
        pass

    @abstractmethod
    def log_error(self, message: str):
        """Log an error message."""
        pass

    @abstractmethod
    def log_warning(self, message: str):
        """Log a warning message."""
        pass

    @abstractmethod
    def log_info(self, message: str):
        """Log an info message."""
        pass

    @abstractmethod
    def log_debug(self, message: str):
        """Log a debug message."""
        pass
