"""OVHcloud implementation of the API gateway blueprint."""

from __future__ import annotations

from typing import Any

import ovh
from ovh import exceptions as ovh_exceptions

from instancectl.base.config import OvhConfig
from instancectl.base.exceptions import (
    ApiUnavailableError,
    ConfigurationError,
    GatewayError,
    ProviderRequestError,
    UnauthorizedError,
)
from instancectl.base.gateway import ApiGatewayBlueprint
from instancectl.base.retry import RetryPolicy, retry

_TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    ovh_exceptions.HTTPError,
    ovh_exceptions.NetworkError,
)

_AUTH_ERRORS: tuple[type[BaseException], ...] = (
    ovh_exceptions.InvalidKey,
    ovh_exceptions.InvalidCredential,
    ovh_exceptions.NotCredential,
    ovh_exceptions.NotGrantedCall,
    ovh_exceptions.Forbidden,
)


def error_payload(exc: BaseException) -> dict[str, Any]:
    """Describe a provider exception as a plain dict, without reinterpreting it."""
    payload: dict[str, Any] = {
        "type": type(exc).__name__,
        "message": str(exc),
        "query_id": getattr(exc, "query_id", None),
    }
    response = getattr(exc, "response", None)
    if response is not None:
        payload["status"] = getattr(response, "status_code", None)
        try:
            payload["body"] = response.json()
        except ValueError:
            payload["body"] = getattr(response, "text", None)
    return payload


def translate(exc: ovh_exceptions.APIError, msg: str) -> GatewayError:
    """Map an ``ovh`` exception onto the gateway error it represents."""
    if isinstance(exc, _TRANSPORT_ERRORS):
        cls: type[GatewayError] = ApiUnavailableError
    elif isinstance(exc, _AUTH_ERRORS):
        cls = UnauthorizedError
    else:
        cls = ProviderRequestError
    return cls(msg, payload=error_payload(exc))


class Gateway(ApiGatewayBlueprint):
    """Signed access to the OVHcloud API through :class:`ovh.Client`.

    Reads are retried on transport failures; writes are sent exactly once.

    Attributes:
        client: Underlying ``ovh.Client``.
    """

    def __init__(self, config: OvhConfig) -> None:
        """Initialize the OVH client.

        Args:
            config: Validated configuration carrying the endpoint and the
                application key, secret and consumer key.

        Raises:
            ConfigurationError: If the endpoint is not one ``ovh`` knows.
        """
        try:
            self.client = ovh.Client(
                endpoint=config.endpoint,
                application_key=config.application_key,
                application_secret=config.application_secret,
                consumer_key=config.consumer_key,
                timeout=config.timeout,
            )
        except ovh_exceptions.InvalidRegion as e:
            raise ConfigurationError(
                f"Unknown endpoint '{config.endpoint}'", endpoint=config.endpoint
            ) from e
        self._read = retry(
            RetryPolicy(max_attempts=config.max_attempts),
            _TRANSPORT_ERRORS,
        )(self._raw_get)

    def _raw_get(self, path: str, need_auth: bool, params: dict[str, Any]) -> Any:
        return self.client.get(path, _need_auth=need_auth, **params)

    def get(self, path: str, *, need_auth: bool = True, **params: Any) -> Any:
        try:
            return self._read(path, need_auth, params)
        except ovh_exceptions.APIError as e:
            raise translate(e, f"GET {path} failed") from e

    def post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        try:
            return self.client.post(path, **(body or {}))
        except ovh_exceptions.APIError as e:
            raise translate(e, f"POST {path} failed") from e

    def delete(self, path: str) -> Any:
        try:
            return self.client.delete(path)
        except ovh_exceptions.APIError as e:
            raise translate(e, f"DELETE {path} failed") from e
