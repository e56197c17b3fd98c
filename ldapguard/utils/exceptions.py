"""
ldapguard exception classes for better error handling.
"""

from typing import Any, Dict, Optional


class LdapGuardError(Exception):
    """Base exception for all ldapguard errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(LdapGuardError):
    """Raised when there's a configuration problem."""
    pass


class AuthenticationError(LdapGuardError):
    """Raised when authentication fails."""
    pass


class ConnectionNotEstablishedError(LdapGuardError):
    """Raised when an operation needs a directory connection that was never set."""
    pass
