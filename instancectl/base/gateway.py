"""API gateway blueprint."""

from abc import ABC, abstractmethod
from typing import Any


class ApiGatewayBlueprint(ABC):
    """Abstract interface for an authenticated, project-scoped REST API.

    Implementations own credentials, request signing and transport. Every
    method returns the decoded response body or raises a
    :class:`~instancectl.base.exceptions.GatewayError` subclass carrying the
    provider's error payload.
    """

    @abstractmethod
    def get(self, path: str, *, need_auth: bool = True, **params: Any) -> Any:
        """Issue a read.

        Args:
            path: API path (e.g. ``/cloud/project``).
            need_auth: Whether the request must be signed.
            **params: Query string parameters.
        """

    @abstractmethod
    def post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        """Issue a write with an optional JSON body."""

    @abstractmethod
    def delete(self, path: str) -> Any:
        """Issue a delete."""
