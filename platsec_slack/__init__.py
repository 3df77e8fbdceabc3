"""
Slack notifications through the platform relay.

Provides:
- Environment-driven configuration with credentials from SSM Parameter Store
- Message and relay payload construction
- Delivery over HTTP with fail-fast batch semantics
"""

from .client import SlackNotifier, build_auth_header
from .config import NotifierConfig, build_config, read_env, validate_keys_present
from .messages import create_messages, new_message
from .notifier import load_config, send_message_with_env_vars, send_message_with_params
from .payload import serialize, to_payload
from .ssm import CredentialResolver, create_ssm_client
from .types import (
    ConfigurationError,
    CredentialResolutionError,
    DeliveryError,
    EmptyChannelListError,
    ErrorKind,
    Message,
    MessagePayload,
    NotifierError,
    PayloadError,
    SendResult,
    SendStatus,
)

__all__ = [
    # Config
    'NotifierConfig',
    'build_config',
    'read_env',
    'validate_keys_present',
    'load_config',
    # Credentials
    'CredentialResolver',
    'create_ssm_client',
    # Messages
    'Message',
    'MessagePayload',
    'new_message',
    'create_messages',
    'to_payload',
    'serialize',
    # Delivery
    'SlackNotifier',
    'build_auth_header',
    'send_message_with_env_vars',
    'send_message_with_params',
    # Results and errors
    'SendResult',
    'SendStatus',
    'ErrorKind',
    'NotifierError',
    'ConfigurationError',
    'EmptyChannelListError',
    'CredentialResolutionError',
    'PayloadError',
    'DeliveryError',
]

__version__ = '1.0.0'
