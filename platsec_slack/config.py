"""
Notifier Configuration

Reads the relay settings from environment variables and assembles a
NotifierConfig holding the resolved Slack credentials.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, Mapping, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .ssm import CredentialResolver

logger = logging.getLogger(__name__)

SLACK_API_URL_ENV_NAME = "SLACK_API_URL"
SLACK_USERNAME_KEY_ENV_NAME = "SLACK_USERNAME_KEY"
SLACK_TOKEN_KEY_ENV_NAME = "SLACK_TOKEN_KEY"
SSM_READ_ROLE_ENV_NAME = "SSM_READ_ROLE"
AWS_ACCOUNT_ENV_NAME = "AWS_ACCOUNT"

REQUIRED_ENV_KEYS = (
    SLACK_API_URL_ENV_NAME,
    SLACK_USERNAME_KEY_ENV_NAME,
    SLACK_TOKEN_KEY_ENV_NAME,
    SSM_READ_ROLE_ENV_NAME,
    AWS_ACCOUNT_ENV_NAME,
)

DEFAULT_HTTP_TIMEOUT = 10.0


def read_env(names: Optional[Iterable[str]] = None) -> Dict[str, str]:
    """
    Read the named environment variables.

    Args:
        names: Variable names to read (defaults to the required keys)

    Returns:
        Mapping of name to value, with "" for unset variables
    """
    names = REQUIRED_ENV_KEYS if names is None else names
    return {name: os.getenv(name, "") for name in names}


def validate_keys_present(names: Sequence[str]) -> bool:
    """
    Check that every named variable is set in the environment.

    Stops at the first absent key. A variable set to "" counts as present.
    """
    for name in names:
        if name not in os.environ:
            logger.warning("Environment variable %s is not set", name)
            return False
    return True


@dataclass(frozen=True)
class NotifierConfig:
    """Resolved configuration for a single send invocation."""

    username: str = ""
    token: str = field(default="", repr=False)
    endpoint_url: str = ""
    account_id: str = ""
    role_name: str = ""
    timeout: float = DEFAULT_HTTP_TIMEOUT

    @classmethod
    def empty(cls) -> "NotifierConfig":
        """Sentinel config signalling a failed build."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """Check if this is the failed-build sentinel."""
        return not any(self._credentials())

    @property
    def is_complete(self) -> bool:
        """Check that every field a successful build fills is set."""
        return all(self._credentials())

    def _credentials(self) -> Tuple[str, ...]:
        return (self.username, self.token, self.endpoint_url, self.account_id, self.role_name)


def _positive_float(name: str, default: float) -> float:
    """Read a timeout from the environment; it must be a number above 0."""
    value = float(os.getenv(name, default))
    if not value > 0:
        raise ValueError(f"{name} must be greater than 0, got {value}")
    return value


@dataclass
class AWSSettings:
    """AWS client settings for the parameter store."""

    region: Optional[str] = None
    profile: Optional[str] = None
    connect_timeout: float = 5.0
    read_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "AWSSettings":
        """Create settings from environment variables."""
        return cls(
            region=os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION"),
            profile=os.getenv("AWS_PROFILE"),
            connect_timeout=_positive_float("SSM_CONNECT_TIMEOUT", 5.0),
            read_timeout=_positive_float("SSM_READ_TIMEOUT", 10.0),
        )


def http_timeout_from_env() -> float:
    """HTTP timeout for the relay call, from SLACK_HTTP_TIMEOUT."""
    return _positive_float("SLACK_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)


def build_config(
    env: Mapping[str, str],
    resolver: "CredentialResolver",
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> NotifierConfig:
    """
    Assemble a NotifierConfig from the raw environment mapping.

    The username and token entries of ``env`` are parameter names; they are
    resolved through ``resolver`` and only the secret values are kept.

    Args:
        env: Exactly the five required keys, each non-empty
        resolver: CredentialResolver used to fetch the secrets
        timeout: HTTP timeout carried on the config

    Returns:
        Populated config, or NotifierConfig.empty() if the mapping is
        incomplete or the resolved secrets do not line up

    Raises:
        Whatever the resolver raises; store errors are not swallowed
    """
    if len(env) != len(REQUIRED_ENV_KEYS):
        logger.error(
            "Expected %d configuration items, got %d", len(REQUIRED_ENV_KEYS), len(env)
        )
        return NotifierConfig.empty()

    missing = [key for key in REQUIRED_ENV_KEYS if not env.get(key)]
    if missing:
        logger.error("Missing configuration items: %s", ", ".join(missing))
        return NotifierConfig.empty()

    username_key = env[SLACK_USERNAME_KEY_ENV_NAME]
    token_key = env[SLACK_TOKEN_KEY_ENV_NAME]
    secrets = resolver.resolve_parameters({username_key, token_key})

    if len(secrets) != 2 or not secrets.get(username_key) or not secrets.get(token_key):
        logger.error("Resolved %d of 2 Slack credentials", len(secrets))
        return NotifierConfig.empty()

    return NotifierConfig(
        username=secrets[username_key],
        token=secrets[token_key],
        endpoint_url=env[SLACK_API_URL_ENV_NAME],
        account_id=env[AWS_ACCOUNT_ENV_NAME],
        role_name=env[SSM_READ_ROLE_ENV_NAME],
        timeout=timeout,
    )
