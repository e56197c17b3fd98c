"""
The authentication guard.

The guard validates a credential pair, binds it against a directory
connection and fires lifecycle events through a dispatcher:

    attempt -> Attempting -> Binding -> Bound -> Passed

A failed bind raises ``BindError`` and no further events are fired.
"""

from typing import Any, Optional

import structlog

from ldapguard.connections.interfaces import ConnectionInterface
from ldapguard.events.dispatcher import DispatcherInterface, NullDispatcher
from .events import Attempting, Binding, Bound, Passed
from .exceptions import BindError, PasswordRequiredError, UsernameRequiredError

logger = structlog.get_logger(__name__)


class Guard:
    """
    Credential validation facade over a directory connection.

    The guard holds no state between calls beyond its collaborators. Binding
    changes the identity of the underlying connection, so one guard (and its
    connection) must not be shared across threads.
    """

    def __init__(
        self,
        connection: ConnectionInterface,
        configuration: Any,
        dispatcher: Optional[DispatcherInterface] = None,
    ):
        """
        Initialize the guard.

        Args:
            connection: Connection to bind against
            configuration: Object exposing ``get(key)`` for the administrator
                ``username`` and ``password``
            dispatcher: Event dispatcher, events are dropped when omitted
        """
        self.connection = connection
        self.configuration = configuration
        self._dispatcher: DispatcherInterface = dispatcher or NullDispatcher()

    def attempt(self, username: str, password: str, bind_as_user: bool = False) -> bool:
        """
        Attempt to authenticate a user.

        Args:
            username: Identity to authenticate
            password: Password of the identity
            bind_as_user: Bind as the configured administrator first

        Returns:
            True once the user has been bound

        Raises:
            UsernameRequiredError: When the username is empty
            PasswordRequiredError: When the password is empty
            BindError: When the directory rejects a bind
        """
        if not username:
            raise UsernameRequiredError("A username must be specified.")
        if not password:
            raise PasswordRequiredError("A password must be specified.")

        if bind_as_user:
            admin_username = self.configuration.get("username")
            admin_password = self.configuration.get("password")

            # Nothing to bind as when the domain has no administrator configured.
            if admin_username:
                self.bind(admin_username, admin_password)

        self._fire(Attempting(username, password))

        self.bind(username, password)

        self._fire(Passed(username, password))

        logger.info("Authentication passed", user=username)

        return True

    def bind(self, username: Optional[str] = None, password: Optional[str] = None) -> None:
        """
        Bind the connection as the given identity.

        Raises:
            BindError: When the connection reports a failed bind
        """
        self._fire(Binding(username, password))

        if not self.connection.bind(username, password):
            error = BindError.with_detailed_error(
                self.connection.get_last_error(),
                self.connection.get_detailed_error(),
                self.connection.err_no(),
            )
            logger.warning(
                "Bind failed",
                user=username,
                error=error.message,
                error_code=error.error_code,
            )
            raise error

        logger.debug("Bind succeeded", user=username)

        self._fire(Bound(username, password))

    def bind_as_administrator(self) -> None:
        """
        Bind using the administrator credentials from the configuration.

        Raises:
            BindError: When the directory rejects the administrator
        """
        self.bind(
            self.configuration.get("username"),
            self.configuration.get("password"),
        )

    def get_dispatcher(self) -> DispatcherInterface:
        return self._dispatcher

    def set_dispatcher(self, dispatcher: DispatcherInterface) -> None:
        self._dispatcher = dispatcher

    def unset_dispatcher(self) -> None:
        self._dispatcher = NullDispatcher()

    def _fire(self, event: Any) -> None:
        self._dispatcher.dispatch(event)
