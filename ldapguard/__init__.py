"""
ldapguard - Credential validation against LDAP directories

ldapguard binds user credentials against a directory connection, translates
failed binds into typed exceptions, and fires authentication lifecycle events
that listeners can subscribe to.
"""

__version__ = "0.1.0"
__description__ = "Credential validation against LDAP directories"

# Core imports for easy access
from ldapguard.auth.config import DomainConfiguration
from ldapguard.auth.exceptions import BindError, PasswordRequiredError, UsernameRequiredError
from ldapguard.auth.guard import Guard
from ldapguard.connections import ConnectionInterface, DetailedError, Ldap
from ldapguard.events import Dispatcher, NullDispatcher
from ldapguard.utils.config import Config
from ldapguard.utils.exceptions import LdapGuardError

__all__ = [
    # Core classes
    "Guard",
    "DomainConfiguration",

    # Connections
    "ConnectionInterface",
    "DetailedError",
    "Ldap",

    # Events
    "Dispatcher",
    "NullDispatcher",

    # Exceptions
    "BindError",
    "PasswordRequiredError",
    "UsernameRequiredError",

    # Utils
    "Config",
    "LdapGuardError",

    # Version info
    "__version__",
]
