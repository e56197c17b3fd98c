"""
Event dispatching for ldapguard.
"""

from .dispatcher import Dispatcher, DispatcherInterface, NullDispatcher, event_name

__all__ = [
    "Dispatcher",
    "DispatcherInterface",
    "NullDispatcher",
    "event_name",
]
