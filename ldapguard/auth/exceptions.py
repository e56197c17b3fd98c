"""
Authentication exceptions.
"""

from typing import Optional

from ldapguard.connections.interfaces import DetailedError
from ldapguard.utils.exceptions import AuthenticationError


class UsernameRequiredError(AuthenticationError):
    """Raised when an attempt is made with an empty username."""
    pass


class PasswordRequiredError(AuthenticationError):
    """Raised when an attempt is made with an empty password."""
    pass


class BindError(AuthenticationError):
    """
    Raised when the directory server rejects a bind.

    Carries what the connection reported about the failure so callers can
    inspect or log it.
    """

    def __init__(
        self,
        message: str,
        detailed_error: Optional[DetailedError] = None,
        error_code: int = 0,
    ):
        super().__init__(
            message,
            details={"detailed_error": detailed_error, "error_code": error_code},
        )
        self.detailed_error = detailed_error
        self.error_code = error_code

    @classmethod
    def with_detailed_error(
        cls,
        message: str,
        detailed_error: Optional[DetailedError],
        error_code: int = 0,
    ) -> "BindError":
        return cls(message, detailed_error, error_code)

    def get_detailed_error(self) -> Optional[DetailedError]:
        return self.detailed_error


# Names used by other directory clients
BindException = BindError
UsernameRequiredException = UsernameRequiredError
PasswordRequiredException = PasswordRequiredError
