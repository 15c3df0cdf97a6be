import pytest
from pydantic import ValidationError

from spoterm.modules.notifier.config import NotifierConfig


class TestNotifierConfig:
    """Test cases for NotifierConfig."""

    def test_defaults(self):
        config = NotifierConfig()

        assert config.endpoint == "http://169.254.169.254/latest/meta-data/spot/termination-time"
        assert config.poll_interval == 5.0
        assert config.timeout == 2.0

    def test_custom_values(self):
        config = NotifierConfig(endpoint="http://127.0.0.1:8080/term", poll_interval=0.2, timeout=0.1)

        assert config.endpoint == "http://127.0.0.1:8080/term"
        assert config.poll_interval == 0.2
        assert config.timeout == 0.1

    def test_is_frozen(self):
        config = NotifierConfig()

        with pytest.raises(ValidationError):
            config.poll_interval = 1.0

    @pytest.mark.parametrize("field", ["poll_interval", "timeout"])
    @pytest.mark.parametrize("value", [0, -1])
    def test_durations_must_be_positive(self, field, value):
        with pytest.raises(ValidationError):
            NotifierConfig(**{field: value})

    @pytest.mark.parametrize("endpoint", ["169.254.169.254/latest", "ftp://example.com/term", ""])
    def test_endpoint_must_be_http_url(self, endpoint):
        with pytest.raises(ValidationError, match="Endpoint must be an http"):
            NotifierConfig(endpoint=endpoint)
