"""Connectivity and credential checks run before any real work."""

from __future__ import annotations

from typing import Any

from instancectl.base.async_support import AsyncMixin
from instancectl.base.exceptions import ApiUnavailableError, GatewayError, UnauthorizedError
from instancectl.base.gateway import ApiGatewayBlueprint


class Prober(AsyncMixin):
    """Fail-fast gate: is the API reachable, and is the consumer key authorized?

    Attributes:
        gateway: Gateway the probes are issued through.
    """

    def __init__(self, gateway: ApiGatewayBlueprint) -> None:
        self.gateway = gateway

    def check_connectivity(self) -> Any:
        """Read the server clock.

        Returns:
            The server time as returned by ``/auth/time``.

        Raises:
            ApiUnavailableError: On any failure, with the provider payload.
        """
        try:
            return self.gateway.get("/auth/time", need_auth=False)
        except ApiUnavailableError:
            raise
        except GatewayError as e:
            raise ApiUnavailableError(
                "API connectivity test failed", payload=e.payload
            ) from e

    def check_credentials(self) -> Any:
        """Read the current identity.

        Raises:
            ApiUnavailableError: If the API stopped answering.
            UnauthorizedError: For any other failure, with the provider payload.
        """
        try:
            return self.gateway.get("/me")
        except (ApiUnavailableError, UnauthorizedError):
            raise
        except GatewayError as e:
            raise UnauthorizedError("Consumer key test failed", payload=e.payload) from e

    def probe(self) -> Any:
        """Run both checks in order and return the server time."""
        server_time = self.check_connectivity()
        self.check_credentials()
        return server_time
