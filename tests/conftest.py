"""Shared pytest fixtures for the Slack notifier tests."""

import boto3
import pytest
import requests
from botocore.stub import Stubber
from unittest.mock import MagicMock

from platsec_slack.config import NotifierConfig


USERNAME_PARAM = "/service_accounts/platsec_alerts_slack_username"
TOKEN_PARAM = "/service_accounts/platsec_alerts_slack_password"

ENV_VARS = {
    "SLACK_API_URL": "https://slack-notifications.example.com/slack-notifications/notification",
    "SLACK_USERNAME_KEY": USERNAME_PARAM,
    "SLACK_TOKEN_KEY": TOKEN_PARAM,
    "SSM_READ_ROLE": "platsec_compliance_alerting_read_ssm_parameters_role",
    "AWS_ACCOUNT": "123456789",
}


@pytest.fixture
def slack_env(monkeypatch):
    """Set all required environment variables."""
    for key, value in ENV_VARS.items():
        monkeypatch.setenv(key, value)
    return dict(ENV_VARS)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all required environment variables."""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def ssm_client():
    """Real SSM client with dummy credentials, for use with Stubber."""
    return boto3.client(
        "ssm",
        region_name="eu-west-2",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture
def ssm_stubber(ssm_client):
    """Activated Stubber for the SSM client."""
    with Stubber(ssm_client) as stubber:
        yield stubber


@pytest.fixture
def stub_credentials(ssm_stubber):
    """Queue a successful GetParameters response for the Slack credentials."""
    ssm_stubber.add_response(
        "get_parameters",
        {
            "Parameters": [
                {"Name": USERNAME_PARAM, "Value": "mteasdal", "Type": "SecureString"},
                {"Name": TOKEN_PARAM, "Value": "12344", "Type": "SecureString"},
            ],
        },
        {"Names": sorted([USERNAME_PARAM, TOKEN_PARAM]), "WithDecryption": True},
    )
    return ssm_stubber


@pytest.fixture
def notifier_config():
    """A fully built config."""
    return NotifierConfig(
        username="mteasdal",
        token="12344",
        endpoint_url=ENV_VARS["SLACK_API_URL"],
        account_id="123456789",
        role_name="platsec_compliance_alerting_read_ssm_parameters_role",
    )


def make_session(*status_codes):
    """Create a mock requests session answering with the given status codes."""
    session = MagicMock(spec=requests.Session)
    session.post.side_effect = [MagicMock(status_code=code) for code in status_codes]
    return session


@pytest.fixture
def ok_session():
    """Session whose relay always answers 200."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = MagicMock(status_code=200)
    return session


@pytest.fixture
def session_factory():
    """Factory for sessions answering with a fixed sequence of status codes."""
    return make_session
