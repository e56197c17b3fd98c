"""
ldap3 backed directory connection.
"""

from typing import Any, Optional

import ldap3
from ldap3.core.exceptions import LDAPException

from ldapguard.utils.exceptions import ConfigurationError, ConnectionNotEstablishedError
from ldapguard.utils.logging import LoggerMixin
from .interfaces import ConnectionInterface, DetailedError


class Ldap(LoggerMixin, ConnectionInterface):
    """
    Directory connection wrapping an ``ldap3.Connection``.

    Every bind swaps the identity of the wrapped connection, so one instance
    represents whoever was bound last. Errors raised by ldap3 while binding are
    recorded and reported as a failed bind.
    """

    def __init__(self, connection: Optional[ldap3.Connection] = None, use_tls: bool = False):
        super().__init__()
        self._connection = connection
        self._use_tls = use_tls
        self._last_exception: Optional[LDAPException] = None

    @classmethod
    def from_configuration(cls, config: Any, **connection_options: Any) -> "Ldap":
        """
        Build a connection from a domain configuration.

        Args:
            config: Object exposing ``get(key)`` for the domain options
            **connection_options: Extra keyword arguments for ``ldap3.Connection``,
                taking precedence over the configured ``options``

        Returns:
            Ldap instance, not yet bound

        Raises:
            ConfigurationError: If no hosts are configured
        """
        if not config.get("hosts"):
            raise ConfigurationError("At least one host must be configured.")

        servers = [
            ldap3.Server(
                host,
                port=config.get("port"),
                use_ssl=config.get("use_ssl"),
                connect_timeout=config.get("timeout"),
                get_info=ldap3.NONE,
            )
            for host in config.get("hosts")
        ]

        options = {
            "version": config.get("version"),
            "auto_referrals": config.get("follow_referrals"),
            "receive_timeout": config.get("timeout"),
            "raise_exceptions": False,
        }
        options.update(config.get("options"))
        options.update(connection_options)

        # ldap3 turns a list of servers into a ServerPool.
        connection = ldap3.Connection(servers[0] if len(servers) == 1 else servers, **options)

        return cls(connection, use_tls=config.get("use_tls"))

    @property
    def connection(self) -> Optional[ldap3.Connection]:
        """The wrapped ldap3 connection."""
        return self._connection

    def set_connection(self, connection: ldap3.Connection) -> None:
        self._connection = connection
        self._last_exception = None

    def bind(self, username: Optional[str] = None, password: Optional[str] = None) -> bool:
        connection = self._require_connection()

        connection.user = username
        connection.password = password
        connection.authentication = ldap3.SIMPLE if username else ldap3.ANONYMOUS

        try:
            if connection.closed:
                connection.open(read_server_info=False)
            if self._use_tls and not connection.tls_started:
                connection.start_tls(read_server_info=False)
            bound = connection.bind()
        except LDAPException as e:
            self._last_exception = e
            self.logger.warning("LDAP bind raised", user=username, error=str(e))
            return False

        self._last_exception = None
        return bool(bound)

    def get_last_error(self) -> str:
        if self._last_exception is not None:
            return str(self._last_exception)

        result = self._last_result()
        if not result or result.get("result", 0) == 0:
            return ""
        return result.get("description") or ""

    def get_detailed_error(self) -> Optional[DetailedError]:
        if self._last_exception is not None:
            return DetailedError(-1, type(self._last_exception).__name__, str(self._last_exception))

        result = self._last_result()
        if not result or result.get("result", 0) == 0:
            return None

        return DetailedError(
            result["result"],
            result.get("description") or "",
            result.get("message") or "",
        )

    def err_no(self) -> int:
        if self._last_exception is not None:
            return -1

        result = self._last_result()
        if not result:
            return 0
        return result.get("result", 0)

    def _last_result(self) -> Optional[dict]:
        if self._connection is None:
            return None
        return self._connection.result

    def _require_connection(self) -> ldap3.Connection:
        if self._connection is None:
            raise ConnectionNotEstablishedError(
                "No ldap3 connection has been set on this instance"
            )
        return self._connection
