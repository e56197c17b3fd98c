"""
Directory connections for ldapguard.
"""

from .interfaces import ConnectionInterface, DetailedError
from .ldap import Ldap

__all__ = [
    "ConnectionInterface",
    "DetailedError",
    "Ldap",
]
