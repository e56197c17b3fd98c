"""
Utilities package for ldapguard.
"""

from ldapguard.utils.config import Config, get_config, set_config, reset_config
from ldapguard.utils.exceptions import (
    LdapGuardError,
    ConfigurationError,
    AuthenticationError,
)

__all__ = [
    # Config
    "Config",
    "get_config",
    "set_config",
    "reset_config",

    # Exceptions
    "LdapGuardError",
    "ConfigurationError",
    "AuthenticationError",
]
