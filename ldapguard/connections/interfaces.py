"""
Connection interfaces for ldapguard.

The guard never talks to a directory server directly. It binds through an
object implementing ``ConnectionInterface``, which lets the network client be
swapped out (or replaced by a test double) through dependency injection.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DetailedError:
    """Structured diagnostic payload reported by a connection after a failure."""
    error_code: int
    diagnostic_message: str
    raw_error_string: str

    def get_error_code(self) -> int:
        return self.error_code

    def get_diagnostic_message(self) -> str:
        return self.diagnostic_message

    def get_raw_error_string(self) -> str:
        return self.raw_error_string


class ConnectionInterface(ABC):
    """
    Abstract interface for directory connections.

    Implementations wrap a concrete LDAP client and report the outcome of the
    last operation through ``get_last_error``, ``get_detailed_error`` and
    ``err_no``.
    """

    @abstractmethod
    def bind(self, username: Optional[str] = None, password: Optional[str] = None) -> bool:
        """
        Bind to the directory as the given identity.

        Args:
            username: Bind DN or user principal, None for an anonymous bind
            password: Password for the identity

        Returns:
            True when the server accepted the credentials
        """
        pass

    @abstractmethod
    def get_last_error(self) -> str:
        """Message describing the last error, empty when there was none."""
        pass

    @abstractmethod
    def get_detailed_error(self) -> Optional[DetailedError]:
        """
        Detailed information about the last error.

        Returns:
            DetailedError, or None when the connection has nothing to report
        """
        pass

    @abstractmethod
    def err_no(self) -> int:
        """Numeric result code of the last operation."""
        pass
