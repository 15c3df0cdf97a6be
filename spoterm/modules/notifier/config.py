from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ENDPOINT = "http://169.254.169.254/latest/meta-data/spot/termination-time"
DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_TIMEOUT = 2.0


class NotifierConfig(BaseModel):
    """Configuration captured by a single subscription.

    Frozen so that concurrent subscriptions never share mutable settings.
    """
    model_config = ConfigDict(frozen=True)

    endpoint: str = DEFAULT_ENDPOINT
    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL, gt=0)  # seconds between probes
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)  # total timeout of one probe

    @field_validator('endpoint')
    @classmethod
    def validate_endpoint(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Endpoint must be an http(s) URL, got: {value}")
        return value
