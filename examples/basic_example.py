#!/usr/bin/env python3
"""
Basic example of using ldapguard to authenticate a user.

This example demonstrates:
1. Building a guard over an ldap3 connection
2. Listening to authentication events
3. Handling a rejected bind

It runs against ldap3's in-memory directory, so no server is needed.
"""

from ldap3 import MOCK_SYNC, Connection, Server

from ldapguard import BindError, Dispatcher, DomainConfiguration, Guard, Ldap
from ldapguard.auth.events import Passed


def main():
    server = Server("fake_directory")
    connection = Connection(server, client_strategy=MOCK_SYNC)
    connection.strategy.add_entry("cn=admin,dc=local,dc=com", {"userPassword": "admin-secret"})
    connection.strategy.add_entry("cn=johndoe,dc=local,dc=com", {"userPassword": "secret"})

    config = DomainConfiguration(
        hosts=["fake_directory"],
        base_dn="dc=local,dc=com",
        username="cn=admin,dc=local,dc=com",
        password="admin-secret",
    )

    events = Dispatcher()
    events.listen("ldapguard.auth.events.*", lambda name, payload: print(f"  event: {name}"))
    events.listen(Passed, lambda event: print(f"  welcome, {event.username}"))

    guard = Guard(Ldap(connection), config, events)

    print("Authenticating johndoe:")
    guard.attempt("cn=johndoe,dc=local,dc=com", "secret", bind_as_user=True)

    print("Authenticating johndoe with a wrong password:")
    try:
        guard.attempt("cn=johndoe,dc=local,dc=com", "wrong")
    except BindError as e:
        print(f"  rejected: {e.message} (code {e.error_code})")


if __name__ == "__main__":
    main()
