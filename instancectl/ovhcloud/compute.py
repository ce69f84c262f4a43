"""OVHcloud Public Cloud implementation of the Compute blueprint."""

from __future__ import annotations

from typing import NoReturn

from pydantic import ValidationError

from instancectl.base.async_support import AsyncMixin
from instancectl.base.compute import ComputeBlueprint
from instancectl.base.exceptions import (
    GatewayError,
    TransitionRejectedError,
    UnexpectedResponseError,
)
from instancectl.base.gateway import ApiGatewayBlueprint
from instancectl.base.models import CreateRequest, Instance


def _handle(e: GatewayError, action: str, instance_id: str | None) -> NoReturn:
    raise TransitionRejectedError(action, instance_id, e.payload) from e


class Compute(ComputeBlueprint, AsyncMixin):
    """Instance lifecycle calls under ``/cloud/project/{project}/instance``.

    Attributes:
        gateway: Gateway the calls are issued through.
    """

    def __init__(self, gateway: ApiGatewayBlueprint) -> None:
        self.gateway = gateway

    @staticmethod
    def _path(project: str, instance_id: str | None = None) -> str:
        path = f"/cloud/project/{project}/instance"
        return f"{path}/{instance_id}" if instance_id else path

    def create_instance(self, project: str, request: CreateRequest) -> Instance:
        """Request a new instance.

        Returns:
            The instance as acknowledged by the provider.

        Raises:
            TransitionRejectedError: If the provider refuses the request.
            UnexpectedResponseError: If the request went through but the
                response does not describe an instance.
        """
        try:
            result = self.gateway.post(self._path(project), request.to_body())
        except GatewayError as e:
            _handle(e, "create", None)
        try:
            return Instance.model_validate(result)
        except ValidationError as e:
            raise UnexpectedResponseError("create", result, str(e)) from e

    def start_instance(self, project: str, instance_id: str) -> None:
        """Start a stopped instance.

        Raises:
            TransitionRejectedError: If the provider refuses the request.
        """
        try:
            self.gateway.post(f"{self._path(project, instance_id)}/start")
        except GatewayError as e:
            _handle(e, "start", instance_id)

    def delete_instance(self, project: str, instance_id: str) -> None:
        """Delete an instance.

        Raises:
            TransitionRejectedError: If the provider refuses the request.
        """
        try:
            self.gateway.delete(self._path(project, instance_id))
        except GatewayError as e:
            _handle(e, "delete", instance_id)

    def shelve_instance(self, project: str, instance_id: str) -> None:
        """Shelve an instance.

        Raises:
            TransitionRejectedError: If the provider refuses the request.
        """
        try:
            self.gateway.post(f"{self._path(project, instance_id)}/shelve")
        except GatewayError as e:
            _handle(e, "shelve", instance_id)

    def list_instances(self, project: str) -> list[Instance]:
        """List every instance of the project.

        Returns:
            Instances with ``id``, ``name`` and ``status``.
        """
        return [Instance.model_validate(item) for item in self.gateway.get(self._path(project))]
