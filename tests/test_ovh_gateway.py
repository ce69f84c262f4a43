"""Tests for the OVHcloud API gateway."""

from unittest.mock import patch, MagicMock
import pytest
from ovh import exceptions as ovh_exceptions

from instancectl.base.config import OvhConfig
from instancectl.base.exceptions import (
    ApiUnavailableError,
    ConfigurationError,
    ProviderRequestError,
    UnauthorizedError,
)
from instancectl.ovhcloud.gateway import Gateway, error_payload


@pytest.fixture
def gw():
    with patch("instancectl.ovhcloud.gateway.ovh") as mock_ovh, \
            patch("instancectl.base.retry.time.sleep"):
        mock_client = MagicMock()
        mock_ovh.Client.return_value = mock_client
        gateway = Gateway(OvhConfig(
            endpoint="ovh-eu",
            application_key="ak",
            application_secret="as",
            consumer_key="ck",
            max_attempts=3,
        ))
        yield gateway, mock_client, mock_ovh


class TestInit:
    def test_client_built_from_config(self, gw):
        _, _, mock_ovh = gw
        mock_ovh.Client.assert_called_once_with(
            endpoint="ovh-eu",
            application_key="ak",
            application_secret="as",
            consumer_key="ck",
            timeout=180,
        )

    @patch("instancectl.ovhcloud.gateway.ovh")
    def test_unknown_endpoint(self, mock_ovh):
        mock_ovh.Client.side_effect = ovh_exceptions.InvalidRegion("Unknow endpoint ovh-mars")
        with pytest.raises(ConfigurationError) as exc_info:
            Gateway(OvhConfig(endpoint="ovh-mars"))
        assert exc_info.value.endpoint == "ovh-mars"


class TestGet:
    def test_passes_query_params(self, gw):
        gateway, client, _ = gw
        client.get.return_value = [{"id": "f1", "name": "b3-64"}]
        result = gateway.get("/cloud/project/p/flavor", region="GRA11")
        assert result == [{"id": "f1", "name": "b3-64"}]
        client.get.assert_called_once_with(
            "/cloud/project/p/flavor", _need_auth=True, region="GRA11"
        )

    def test_unsigned(self, gw):
        gateway, client, _ = gw
        client.get.return_value = 1700000000
        assert gateway.get("/auth/time", need_auth=False) == 1700000000
        client.get.assert_called_once_with("/auth/time", _need_auth=False)

    def test_retries_transport_errors(self, gw):
        gateway, client, _ = gw
        client.get.side_effect = [ovh_exceptions.NetworkError("down"), ["proj-a"]]
        assert gateway.get("/cloud/project") == ["proj-a"]
        assert client.get.call_count == 2

    def test_gives_up_after_max_attempts(self, gw):
        gateway, client, _ = gw
        client.get.side_effect = ovh_exceptions.HTTPError("Low HTTP request failed error")
        with pytest.raises(ApiUnavailableError) as exc_info:
            gateway.get("/cloud/project")
        assert client.get.call_count == 3
        assert exc_info.value.payload["type"] == "HTTPError"

    def test_auth_error_not_retried(self, gw):
        gateway, client, _ = gw
        client.get.side_effect = ovh_exceptions.InvalidCredential("This credential is not valid")
        with pytest.raises(UnauthorizedError) as exc_info:
            gateway.get("/me")
        assert client.get.call_count == 1
        assert exc_info.value.payload["message"] == "This credential is not valid"

    @pytest.mark.parametrize("exc_class", [
        ovh_exceptions.InvalidKey,
        ovh_exceptions.NotCredential,
        ovh_exceptions.NotGrantedCall,
        ovh_exceptions.Forbidden,
    ])
    def test_auth_errors_map_to_unauthorized(self, gw, exc_class):
        gateway, client, _ = gw
        client.get.side_effect = exc_class("denied")
        with pytest.raises(UnauthorizedError):
            gateway.get("/me")

    def test_other_errors_map_to_provider_request(self, gw):
        gateway, client, _ = gw
        client.get.side_effect = ovh_exceptions.ResourceNotFoundError("This service does not exist")
        with pytest.raises(ProviderRequestError) as exc_info:
            gateway.get("/cloud/project/nope/instance")
        assert exc_info.value.payload["type"] == "ResourceNotFoundError"
        assert isinstance(exc_info.value.__cause__, ovh_exceptions.ResourceNotFoundError)


class TestWrites:
    def test_post_body(self, gw):
        gateway, client, _ = gw
        client.post.return_value = {"id": "i-1"}
        result = gateway.post("/cloud/project/p/instance", {"name": "builder", "region": "GRA11"})
        assert result == {"id": "i-1"}
        client.post.assert_called_once_with(
            "/cloud/project/p/instance", name="builder", region="GRA11"
        )

    def test_post_without_body(self, gw):
        gateway, client, _ = gw
        gateway.post("/cloud/project/p/instance/i-1/start")
        client.post.assert_called_once_with("/cloud/project/p/instance/i-1/start")

    def test_post_not_retried(self, gw):
        gateway, client, _ = gw
        client.post.side_effect = ovh_exceptions.NetworkError("down")
        with pytest.raises(ApiUnavailableError):
            gateway.post("/cloud/project/p/instance/i-1/shelve")
        assert client.post.call_count == 1

    def test_delete(self, gw):
        gateway, client, _ = gw
        gateway.delete("/cloud/project/p/instance/i-1")
        client.delete.assert_called_once_with("/cloud/project/p/instance/i-1")

    def test_delete_error(self, gw):
        gateway, client, _ = gw
        client.delete.side_effect = ovh_exceptions.BadParametersError("Invalid instance")
        with pytest.raises(ProviderRequestError):
            gateway.delete("/cloud/project/p/instance/i-1")
        assert client.delete.call_count == 1


class TestErrorPayload:
    def test_without_response(self):
        payload = error_payload(ovh_exceptions.APIError("boom"))
        assert payload == {"type": "APIError", "message": "boom", "query_id": None}

    def test_with_response(self):
        response = MagicMock()
        response.status_code = 403
        response.headers = {"X-OVH-QUERYID": "EU.ext-1.abc"}
        response.json.return_value = {"errorCode": "NOT_GRANTED_CALL", "message": "denied"}
        payload = error_payload(ovh_exceptions.NotGrantedCall("denied", response=response))
        assert payload["type"] == "NotGrantedCall"
        assert payload["status"] == 403
        assert payload["body"] == {"errorCode": "NOT_GRANTED_CALL", "message": "denied"}

    def test_response_without_json(self):
        response = MagicMock()
        response.status_code = 502
        response.headers = {}
        response.json.side_effect = ValueError("not json")
        response.text = "Bad Gateway"
        payload = error_payload(ovh_exceptions.APIError("boom", response=response))
        assert payload["body"] == "Bad Gateway"
