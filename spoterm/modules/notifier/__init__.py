"""Spot instance termination notices from the EC2 instance metadata endpoint."""

from .config import NotifierConfig, DEFAULT_ENDPOINT, DEFAULT_POLL_INTERVAL, DEFAULT_TIMEOUT
from .errors import ProbeError, ResponseStatusError, UnsupportedEnvironmentError
from .notifier import Notifier, subscribe
from .result import PollResult, PollStatus, TIME_FORMAT, parse_termination_time
from .subscription import Subscription, SubscriptionState

__all__ = [
    'Notifier',
    'NotifierConfig',
    'PollResult',
    'PollStatus',
    'ProbeError',
    'ResponseStatusError',
    'Subscription',
    'SubscriptionState',
    'UnsupportedEnvironmentError',
    'DEFAULT_ENDPOINT',
    'DEFAULT_POLL_INTERVAL',
    'DEFAULT_TIMEOUT',
    'TIME_FORMAT',
    'parse_termination_time',
    'subscribe',
]
