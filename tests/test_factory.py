from unittest.mock import patch, MagicMock
import pytest

from instancectl.base import ApiGatewayBlueprint, ComputeBlueprint
from instancectl.base.config import OvhConfig
from instancectl.factory import build_gateway, universal_factory
from instancectl.ovhcloud import Gateway, Prober, Resolver


class TestBuildGateway:
    @patch("instancectl.ovhcloud.gateway.ovh")
    def test_ovh(self, mock_ovh):
        mock_ovh.Client.return_value = MagicMock()
        result = build_gateway("ovh", OvhConfig(endpoint="ovh-eu"))
        assert isinstance(result, Gateway)
        assert isinstance(result, ApiGatewayBlueprint)

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported cloud provider"):
            build_gateway("aws", OvhConfig())


class TestUniversalFactory:
    def test_prober(self):
        assert isinstance(universal_factory("prober", "ovh", MagicMock()), Prober)

    def test_resolver(self):
        assert isinstance(universal_factory("resolver", "ovh", MagicMock()), Resolver)

    def test_compute(self):
        gateway = MagicMock()
        result = universal_factory("compute", "ovh", gateway)
        assert isinstance(result, ComputeBlueprint)
        assert result.gateway is gateway

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported cloud provider"):
            universal_factory("compute", "gcp", MagicMock())

    def test_unsupported_service(self):
        with pytest.raises(ValueError, match="Unsupported service"):
            universal_factory("dns", "ovh", MagicMock())
