"""Advance notification of EC2 spot instance termination.

Example::

    subscription = await spoterm.subscribe()
    termination_time = await subscription.wait()
    if termination_time is not None:
        ...  # clean up before the instance is reclaimed
"""

from .modules.notifier import (
    Notifier,
    NotifierConfig,
    PollResult,
    PollStatus,
    ProbeError,
    ResponseStatusError,
    Subscription,
    SubscriptionState,
    UnsupportedEnvironmentError,
    subscribe,
)

__version__ = "0.1.0"

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
    'subscribe',
]
