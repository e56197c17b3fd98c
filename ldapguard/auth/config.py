"""
Domain configuration for the guard.

A ``DomainConfiguration`` describes one directory domain: the hosts to talk
to, how to connect, and the administrator credentials the guard binds with
before looking up users.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import structlog
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ldapguard.utils.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)


class DomainConfiguration(BaseModel):
    """
    Connection options and administrator credentials for a directory domain.

    Options can be given as a dictionary, as keyword arguments, or loaded
    from environment variables. Unknown options and values of the wrong type
    raise ``ConfigurationError``.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    hosts: List[str] = Field(default_factory=list, description="Directory server hostnames")
    base_dn: str = Field(default="", description="Base distinguished name of the domain")
    username: str = Field(default="", description="Administrator bind DN or principal")
    password: str = Field(default="", description="Administrator password")
    port: int = Field(default=389, description="Directory server port")
    use_ssl: bool = Field(default=False, description="Connect over LDAPS")
    use_tls: bool = Field(default=False, description="Issue StartTLS before binding")
    version: int = Field(default=3, description="LDAP protocol version")
    timeout: int = Field(default=5, description="Network timeout in seconds")
    follow_referrals: bool = Field(default=False, description="Chase referrals returned by the server")
    options: Dict[str, Any] = Field(default_factory=dict, description="Extra keyword arguments for the ldap3 connection")

    def __init__(self, values: Optional[Dict[str, Any]] = None, **data: Any):
        try:
            super().__init__(**{**(values or {}), **data})
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid domain configuration: {e}",
                details={"errors": e.errors()},
            ) from e

    @classmethod
    def from_dict(cls, options: Dict[str, Any]) -> "DomainConfiguration":
        """Create configuration from a dictionary."""
        return cls(options)

    @classmethod
    def from_env(
        cls,
        prefix: str = "LDAPGUARD_DOMAIN_",
        env_file: Optional[Union[str, Path]] = None,
    ) -> "DomainConfiguration":
        """
        Create configuration from environment variables.

        ``HOSTS`` is read as a comma separated list, boolean options accept
        true/1/yes/on. ``options`` is not read from the environment.

        Args:
            prefix: Environment variable prefix
            env_file: Optional path to .env file to load first

        Returns:
            DomainConfiguration instance
        """
        if env_file:
            load_dotenv(env_file)

        options: Dict[str, Any] = {}

        for key, field_info in cls.model_fields.items():
            # Connection options are structured and only set programmatically.
            if key == "options":
                continue

            value = os.getenv(f"{prefix}{key.upper()}")
            if value is None:
                continue

            if field_info.annotation == bool:
                options[key] = value.lower() in ("true", "1", "yes", "on")
            elif key == "hosts":
                options[key] = [host.strip() for host in value.split(",") if host.strip()]
            else:
                options[key] = value

        logger.debug("Domain configuration loaded from environment", options=sorted(options))

        return cls(options)

    def get(self, key: str) -> Any:
        """
        Get a configuration option.

        Raises:
            ConfigurationError: If the option does not exist
        """
        if not self.has(key):
            raise ConfigurationError(f"Option {key} does not exist.")
        return getattr(self, key)

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration option, validating its type.

        Raises:
            ConfigurationError: If the option does not exist or the value is invalid
        """
        if not self.has(key):
            raise ConfigurationError(f"Option {key} does not exist.")

        try:
            setattr(self, key, value)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid value for option {key}: {value!r}",
                details={"errors": e.errors()},
            ) from e

    def has(self, key: str) -> bool:
        """Determine if the configuration option exists."""
        return key in type(self).model_fields

    def all(self) -> Dict[str, Any]:
        """Get every option as a dictionary."""
        return self.model_dump()
