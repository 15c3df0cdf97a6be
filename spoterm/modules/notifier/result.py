import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

# from the AWS docs, no sub-second precision and a literal Z
TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
# strptime alone accepts fields without zero padding
TIME_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", re.ASCII)


class PollStatus(str, Enum):
    NOT_SET = "not_set"
    SET = "set"
    ERROR = "error"


@dataclass(frozen=True)
class PollResult:
    """Outcome of a single probe of the metadata endpoint."""
    status: PollStatus
    termination_time: Optional[datetime] = None
    error: Optional[Exception] = None

    @classmethod
    def not_set(cls) -> 'PollResult':
        return cls(PollStatus.NOT_SET)

    @classmethod
    def set(cls, termination_time: datetime) -> 'PollResult':
        return cls(PollStatus.SET, termination_time=termination_time)

    @classmethod
    def failed(cls, error: Exception) -> 'PollResult':
        return cls(PollStatus.ERROR, error=error)


def parse_termination_time(value: str) -> Optional[datetime]:
    """Parse a termination-time value into an aware UTC datetime.

    Returns None when the value is not a timestamp; the metadata item may be
    present without holding a time yet.
    """
    if TIME_PATTERN.fullmatch(value) is None:
        return None
    try:
        parsed = datetime.strptime(value, TIME_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)
