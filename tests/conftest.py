"""Shared fixtures."""

from unittest.mock import MagicMock
import pytest

from instancectl.base.config import ENV_MAP
from instancectl.base.gateway import ApiGatewayBlueprint


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for env_vars in ENV_MAP.values():
        for env_var in env_vars:
            monkeypatch.delenv(env_var, raising=False)


def make_gateway(responses: dict) -> MagicMock:
    """Gateway double answering reads from *responses*, keyed by path.

    A value that is an exception instance is raised instead of returned.
    """
    gateway = MagicMock(spec=ApiGatewayBlueprint)

    def get(path, need_auth=True, **params):
        value = responses[path]
        if isinstance(value, BaseException):
            raise value
        return value

    gateway.get.side_effect = get
    gateway.post.return_value = None
    gateway.delete.return_value = None
    return gateway


@pytest.fixture
def full_config() -> dict:
    return {
        "endpoint": "ovh-eu",
        "application_key": "ak",
        "application_secret": "as",
        "consumer_key": "ck",
        "service_name": "proj-b",
        "instance_name": "builder",
        "ssh_key": "Deploy",
        "flavor_name": "b3-64",
        "image_name": "Ubuntu 24.10",
        "region": "GRA11",
    }


@pytest.fixture
def gateway_factory():
    return make_gateway
