"""
Authentication lifecycle events fired by the guard.

All events live in this module so ``ldapguard.auth.events.*`` listens to every
one of them.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Event:
    """Base authentication event carrying the credentials in use."""
    username: str
    password: str = field(repr=False)

    def get_username(self) -> str:
        return self.username

    def get_password(self) -> str:
        return self.password


@dataclass(frozen=True)
class Attempting(Event):
    """Fired before the guard binds a user during an attempt."""


@dataclass(frozen=True)
class Binding(Event):
    """Fired before the connection is asked to bind."""


@dataclass(frozen=True)
class Bound(Event):
    """Fired after the connection bound successfully."""


@dataclass(frozen=True)
class Passed(Event):
    """Fired once an attempt has authenticated the user."""
