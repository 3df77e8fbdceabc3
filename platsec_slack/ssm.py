"""
Parameter Store Access

Resolves Slack credentials from AWS SSM Parameter Store.
"""

import logging
from typing import Any, Dict, Iterable, Optional

import boto3
from botocore.config import Config as BotoConfig

from .config import AWSSettings
from .types import CredentialResolutionError

logger = logging.getLogger(__name__)


def create_ssm_client(settings: Optional[AWSSettings] = None) -> Any:
    """
    Create an SSM client from the default AWS credential chain.

    Args:
        settings: AWSSettings with region, profile and timeouts

    Returns:
        boto3 SSM client
    """
    settings = settings or AWSSettings.from_env()
    session = boto3.Session(
        profile_name=settings.profile,
        region_name=settings.region,
    )
    client_config = BotoConfig(
        connect_timeout=settings.connect_timeout,
        read_timeout=settings.read_timeout,
        retries={"max_attempts": 1, "mode": "standard"},
    )
    logger.debug("Creating SSM client in region %s", session.region_name)
    return session.client("ssm", config=client_config)


class CredentialResolver:
    """
    Fetches decrypted parameter values by name.

    Errors raised by the SSM client (ClientError, BotoCoreError) propagate
    to the caller unchanged.

    Usage:
        resolver = CredentialResolver(create_ssm_client())
        secrets = resolver.resolve_parameters({"/slack/user", "/slack/token"})
    """

    def __init__(self, client: Any):
        self._client = client

    def resolve_parameter(self, name: str) -> str:
        """Return the decrypted value of a single parameter."""
        response = self._client.get_parameter(Name=name, WithDecryption=True)
        return response["Parameter"]["Value"]

    def resolve_parameters(self, names: Iterable[str]) -> Dict[str, str]:
        """
        Resolve several parameters in one call.

        Args:
            names: Parameter names to fetch

        Returns:
            Mapping of requested name to decrypted value

        Raises:
            CredentialResolutionError: if any name is unknown to the store
                or the store returns a parameter that was not requested
        """
        requested = sorted(set(names))
        response = self._client.get_parameters(Names=requested, WithDecryption=True)

        invalid = response.get("InvalidParameters") or []
        if invalid:
            raise CredentialResolutionError(
                f"Parameters not found: {', '.join(sorted(invalid))}"
            )

        resolved: Dict[str, str] = {}
        for param in response.get("Parameters", []):
            name = param["Name"]
            if name not in requested:
                raise CredentialResolutionError(f"Unexpected parameter returned: {name}")
            resolved[name] = param["Value"]

        logger.debug("Resolved %d of %d parameters", len(resolved), len(requested))
        return resolved
