"""
Configuration Module

Holds the options of a validator instance and reads them from the environment.
"""

import os
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Union

Activation = Union[None, bool, Callable[[Any], bool]]

TRUE_VALUES = ('true', '1', 'yes', 'on')


class ConfigurationError(ValueError):
    """Raised for option combinations a validator cannot be built from."""


@dataclass(frozen=True)
class ValidationConfig:
    """
    Options of an EmailValidator.

    Attributes:
        use_mx: Require at least one MX record for the domain
        use_mx_with_fallback_to_a: Require an MX record or, failing that,
            an A record (MX is always tried first)
        message: Error message for malformed addresses
        mx_message: Error message for domains without mail records
        activation: When the DNS check runs: None or True for always, a
            bool for a static flag, or a callable taking the validation
            context and returning a bool, evaluated on every call
    """
    use_mx: bool = False
    use_mx_with_fallback_to_a: bool = False
    message: Optional[str] = None
    mx_message: Optional[str] = None
    activation: Activation = True

    def __post_init__(self):
        if self.activation is not None and not isinstance(self.activation, bool) \
                and not callable(self.activation):
            raise ConfigurationError(
                f"activation must be a bool or a callable, got {type(self.activation).__name__}"
            )

    @property
    def dns_requested(self) -> bool:
        """Whether any DNS policy is configured at all."""
        return self.use_mx or self.use_mx_with_fallback_to_a

    def dns_active(self, context: Any = None) -> bool:
        """
        Resolve the activation policy for one validation call.

        Args:
            context: Passed to a dynamic activation predicate

        Returns:
            True if the DNS check should run for this call
        """
        if not self.dns_requested:
            return False
        if self.activation is None or isinstance(self.activation, bool):
            return self.activation is not False
        return bool(self.activation(context))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ValidationConfig':
        """
        Build a config from environment variables.

        Reads CHECK_MX, MX_FALLBACK_TO_A, EMAIL_MESSAGE and EMAIL_MX_MESSAGE.
        """
        environ = os.environ if environ is None else environ
        return cls(
            use_mx=_env_bool(environ, 'CHECK_MX'),
            use_mx_with_fallback_to_a=_env_bool(environ, 'MX_FALLBACK_TO_A'),
            message=environ.get('EMAIL_MESSAGE') or None,
            mx_message=environ.get('EMAIL_MX_MESSAGE') or None,
        )


@dataclass(frozen=True)
class DNSSettings:
    """Resolver settings for DNSService."""
    timeout: float = 5
    nameservers: Optional[List[str]] = None


def dns_settings_from_env(environ: Optional[Mapping[str, str]] = None) -> DNSSettings:
    """Read DNS_TIMEOUT and DNS_NAMESERVERS (comma-separated)."""
    environ = os.environ if environ is None else environ

    raw_timeout = environ.get('DNS_TIMEOUT', '5')
    try:
        timeout = float(raw_timeout)
    except ValueError:
        raise ConfigurationError(f"DNS_TIMEOUT must be a number, got {raw_timeout!r}") from None
    if timeout <= 0:
        raise ConfigurationError(f"DNS_TIMEOUT must be positive, got {timeout}")

    nameservers = [ns.strip() for ns in environ.get('DNS_NAMESERVERS', '').split(',') if ns.strip()]
    return DNSSettings(timeout=timeout, nameservers=nameservers or None)


def max_batch_size_from_env(environ: Optional[Mapping[str, str]] = None) -> int:
    """Read MAX_BATCH_SIZE, the largest accepted batch request (default 1000)."""
    environ = os.environ if environ is None else environ

    raw_size = environ.get('MAX_BATCH_SIZE', '1000')
    try:
        size = int(raw_size)
    except ValueError:
        raise ConfigurationError(f"MAX_BATCH_SIZE must be an integer, got {raw_size!r}") from None
    if size <= 0:
        raise ConfigurationError(f"MAX_BATCH_SIZE must be positive, got {size}")
    return size


def _env_bool(environ: Mapping[str, str], name: str) -> bool:
    return environ.get(name, 'false').strip().lower() in TRUE_VALUES
