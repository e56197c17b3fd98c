"""
Authentication module for ldapguard.

This module provides the guard that validates and binds credentials against
a directory connection, the events it fires, and its exceptions.
"""

from .config import DomainConfiguration
from .events import Attempting, Binding, Bound, Event, Passed
from .exceptions import (
    BindError,
    BindException,
    PasswordRequiredError,
    PasswordRequiredException,
    UsernameRequiredError,
    UsernameRequiredException,
)
from .guard import Guard

__all__ = [
    # Guard
    "Guard",
    "DomainConfiguration",

    # Events
    "Event",
    "Attempting",
    "Binding",
    "Bound",
    "Passed",

    # Exceptions
    "BindError",
    "BindException",
    "PasswordRequiredError",
    "PasswordRequiredException",
    "UsernameRequiredError",
    "UsernameRequiredException",
]
