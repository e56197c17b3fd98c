"""
Tests for the authentication guard.
"""

import pytest
from unittest.mock import MagicMock, call

from ldapguard.auth.config import DomainConfiguration
from ldapguard.auth.events import Attempting, Binding, Bound, Passed
from ldapguard.auth.exceptions import (
    BindError,
    BindException,
    PasswordRequiredError,
    UsernameRequiredError,
)
from ldapguard.auth.guard import Guard
from ldapguard.connections import DetailedError, Ldap
from ldapguard.events import Dispatcher, NullDispatcher
from ldapguard.utils.exceptions import AuthenticationError


def failing_connection(mock_connection):
    mock_connection.bind.return_value = False
    mock_connection.get_last_error.return_value = "error"
    mock_connection.get_detailed_error.return_value = DetailedError(
        42, "Invalid credentials", "80090308: LdapErr: DSID-0C09042A"
    )
    mock_connection.err_no.return_value = 1
    return mock_connection


class TestAttemptValidation:
    """Tests for credential validation in attempt."""

    @pytest.mark.parametrize("username", ["", None])
    def test_validate_username(self, mock_connection, username):
        """Test an empty username is rejected before binding."""
        guard = Guard(mock_connection, DomainConfiguration())

        with pytest.raises(UsernameRequiredError):
            guard.attempt(username, "password")

        mock_connection.bind.assert_not_called()

    @pytest.mark.parametrize("password", ["", None])
    def test_validate_password(self, mock_connection, password):
        """Test an empty password is rejected before binding."""
        guard = Guard(mock_connection, DomainConfiguration())

        with pytest.raises(PasswordRequiredError):
            guard.attempt("username", password)

        mock_connection.bind.assert_not_called()

    def test_validation_with_unconnected_ldap(self):
        """Test validation happens before the connection is touched."""
        guard = Guard(Ldap(), DomainConfiguration())

        with pytest.raises(UsernameRequiredError):
            guard.attempt("", "password")

        with pytest.raises(PasswordRequiredError):
            guard.attempt("username", "")

    def test_validation_errors_are_authentication_errors(self, mock_connection):
        """Test validation errors share the authentication error base."""
        guard = Guard(mock_connection, DomainConfiguration())

        with pytest.raises(AuthenticationError):
            guard.attempt("", "")


class TestAttempt:
    """Tests for Guard.attempt."""

    def test_attempt(self, mock_connection):
        """Test binding as administrator then as the user."""
        config = MagicMock()
        config.get.side_effect = {"username": "admin", "password": "password"}.get

        guard = Guard(mock_connection, config)

        assert guard.attempt("username", "password", bind_as_user=True) is True

        assert mock_connection.bind.call_count == 2
        assert mock_connection.bind.call_args_list == [
            call("admin", "password"),
            call("username", "password"),
        ]
        assert config.get.call_args_list == [call("username"), call("password")]

    def test_attempt_without_administrator_bind(self, mock_connection, admin_configuration):
        """Test only the user is bound by default."""
        guard = Guard(mock_connection, admin_configuration)

        assert guard.attempt("johndoe", "secret") is True

        mock_connection.bind.assert_called_once_with("johndoe", "secret")

    def test_attempt_skips_administrator_bind_when_unconfigured(self, mock_connection):
        """Test there is no administrator bind without an administrator username."""
        guard = Guard(mock_connection, DomainConfiguration())

        assert guard.attempt("johndoe", "secret", bind_as_user=True) is True

        mock_connection.bind.assert_called_once_with("johndoe", "secret")

    def test_attempt_propagates_user_bind_failure(self, mock_connection, admin_configuration):
        """Test a rejected user bind raises instead of returning False."""
        mock_connection.bind.side_effect = [True, False]
        mock_connection.get_last_error.return_value = "Invalid credentials"
        mock_connection.get_detailed_error.return_value = None
        mock_connection.err_no.return_value = 49

        guard = Guard(mock_connection, admin_configuration)

        with pytest.raises(BindError) as exc_info:
            guard.attempt("johndoe", "wrong", bind_as_user=True)

        assert exc_info.value.error_code == 49
        assert mock_connection.bind.call_count == 2

    def test_attempt_propagates_administrator_bind_failure(self, mock_connection, admin_configuration):
        """Test a rejected administrator bind stops the attempt."""
        failing_connection(mock_connection)

        guard = Guard(mock_connection, admin_configuration)

        with pytest.raises(BindError):
            guard.attempt("johndoe", "secret", bind_as_user=True)

        mock_connection.bind.assert_called_once_with(
            "cn=admin,dc=local,dc=com", "admin-secret"
        )


class TestBind:
    """Tests for Guard.bind and Guard.bind_as_administrator."""

    def test_bind_using_credentials(self, mock_connection):
        """Test a successful bind returns nothing."""
        guard = Guard(mock_connection, MagicMock())

        assert guard.bind("username", "password") is None

        mock_connection.bind.assert_called_once_with("username", "password")

    def test_bind_always_throws_exception_on_invalid_credentials(self, mock_connection):
        """Test a rejected bind raises with the connection's diagnostics."""
        failing_connection(mock_connection)

        guard = Guard(mock_connection, MagicMock())

        with pytest.raises(BindException) as exc_info:
            guard.bind("username", "password")

        error = exc_info.value
        assert error.message == "error"
        assert str(error) == "error"
        assert error.error_code == 1
        assert error.detailed_error == DetailedError(
            42, "Invalid credentials", "80090308: LdapErr: DSID-0C09042A"
        )
        assert error.get_detailed_error() is error.detailed_error
        assert error.details["error_code"] == 1

        mock_connection.bind.assert_called_once_with("username", "password")
        mock_connection.get_last_error.assert_called_once_with()
        mock_connection.get_detailed_error.assert_called_once_with()
        mock_connection.err_no.assert_called_once_with()

    def test_bind_failure_without_detailed_error(self, mock_connection):
        """Test a connection may report no detailed error."""
        failing_connection(mock_connection)
        mock_connection.get_detailed_error.return_value = None

        guard = Guard(mock_connection, MagicMock())

        with pytest.raises(BindError) as exc_info:
            guard.bind("username", "password")

        assert exc_info.value.detailed_error is None

    def test_bind_as_administrator(self, mock_connection):
        """Test the administrator credentials come from the configuration."""
        config = MagicMock()
        config.get.side_effect = {"username": "admin", "password": "password"}.get

        guard = Guard(mock_connection, config)

        assert guard.bind_as_administrator() is None

        mock_connection.bind.assert_called_once_with("admin", "password")
        assert config.get.call_args_list == [call("username"), call("password")]


class TestGuardEvents:
    """Tests for events fired by the guard."""

    def test_default_dispatcher_is_null(self, mock_connection):
        """Test events are dropped until a dispatcher is set."""
        guard = Guard(mock_connection, DomainConfiguration())

        assert isinstance(guard.get_dispatcher(), NullDispatcher)
        assert guard.attempt("johndoe", "secret") is True

    def test_set_and_unset_dispatcher(self, mock_connection, dispatcher):
        """Test replacing the dispatcher."""
        guard = Guard(mock_connection, DomainConfiguration())

        guard.set_dispatcher(dispatcher)
        assert guard.get_dispatcher() is dispatcher

        guard.unset_dispatcher()
        assert isinstance(guard.get_dispatcher(), NullDispatcher)

    def test_binding_events_are_fired_during_bind(self, mock_connection, dispatcher):
        """Test Binding and Bound carry the bound credentials."""
        fired = []

        def listener(event):
            assert event.get_username() == "johndoe"
            assert event.get_password() == "secret"
            fired.append(type(event))

        dispatcher.listen(Binding, listener)
        dispatcher.listen(Bound, listener)

        guard = Guard(mock_connection, DomainConfiguration({}))
        guard.set_dispatcher(dispatcher)

        guard.bind("johndoe", "secret")

        assert fired == [Binding, Bound]
        mock_connection.bind.assert_called_once_with("johndoe", "secret")

    def test_bound_is_not_fired_on_failure(self, mock_connection, dispatcher):
        """Test only Binding fires when the bind is rejected."""
        failing_connection(mock_connection)
        fired = []
        dispatcher.listen([Binding, Bound], lambda event: fired.append(type(event)))

        guard = Guard(mock_connection, DomainConfiguration(), dispatcher)

        with pytest.raises(BindError):
            guard.bind("johndoe", "secret")

        assert fired == [Binding]

    def test_auth_events_are_fired_during_attempt(self, mock_connection, dispatcher):
        """Test every lifecycle event fires in order with the user's credentials."""
        fired = []

        def listener(event):
            assert event.username == "johndoe"
            assert event.password == "secret"
            fired.append(type(event))

        for event in (Binding, Bound, Attempting, Passed):
            dispatcher.listen(event, listener)

        guard = Guard(mock_connection, DomainConfiguration())
        guard.set_dispatcher(dispatcher)

        assert guard.attempt("johndoe", "secret", bind_as_user=True) is True

        assert fired == [Attempting, Binding, Bound, Passed]
        mock_connection.bind.assert_called_once_with("johndoe", "secret")

    def test_all_auth_events_can_be_listened_to_with_wildcard(self, mock_connection, dispatcher):
        """Test a namespace wildcard sees all four events."""
        names = []

        dispatcher.listen("ldapguard.auth.events.*", lambda name, payload: names.append(name))

        guard = Guard(mock_connection, DomainConfiguration())
        guard.set_dispatcher(dispatcher)

        assert guard.attempt("johndoe", "secret", bind_as_user=True) is True

        assert names == [
            "ldapguard.auth.events.Attempting",
            "ldapguard.auth.events.Binding",
            "ldapguard.auth.events.Bound",
            "ldapguard.auth.events.Passed",
        ]

    def test_administrator_bind_fires_only_binding_events(self, mock_connection, dispatcher, admin_configuration):
        """Test the administrator bind fires Binding and Bound but no attempt events."""
        fired = []
        dispatcher.listen(
            "ldapguard.auth.events.*",
            lambda name, payload: fired.append((type(payload[0]), payload[0].username)),
        )

        guard = Guard(mock_connection, admin_configuration, dispatcher)
        guard.bind_as_administrator()

        admin = "cn=admin,dc=local,dc=com"
        assert fired == [(Binding, admin), (Bound, admin)]

    def test_attempt_with_administrator_bind_event_order(self, mock_connection, dispatcher, admin_configuration):
        """Test the administrator binds before the attempt events start."""
        fired = []
        dispatcher.listen(
            "ldapguard.auth.events.*",
            lambda name, payload: fired.append((type(payload[0]), payload[0].username)),
        )

        guard = Guard(mock_connection, admin_configuration, dispatcher)
        guard.attempt("johndoe", "secret", bind_as_user=True)

        admin = "cn=admin,dc=local,dc=com"
        assert fired == [
            (Binding, admin),
            (Bound, admin),
            (Attempting, "johndoe"),
            (Binding, "johndoe"),
            (Bound, "johndoe"),
            (Passed, "johndoe"),
        ]
