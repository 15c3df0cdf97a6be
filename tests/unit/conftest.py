import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add the repository root to the Python path
root_path = str(Path(__file__).parent.parent.parent)
if root_path not in sys.path:
    sys.path.insert(0, root_path)

from spoterm.modules.notifier.config import NotifierConfig


@pytest.fixture
def mock_logger():
    """Create a mock logger."""
    logger = Mock()
    logger.log_probe = Mock()
    logger.log_status = Mock()
    logger.log_notice = Mock()
    logger.log_info = Mock()
    logger.log_error = Mock()
    logger.log_warning = Mock()
    logger.log_debug = Mock()
    return logger


@pytest.fixture
def make_config():
    """Build a config with short intervals suitable for tests."""
    def _make_config(endpoint: str, poll_interval: float = 0.05, timeout: float = 0.5) -> NotifierConfig:
        return NotifierConfig(endpoint=endpoint, poll_interval=poll_interval, timeout=timeout)
    return _make_config
