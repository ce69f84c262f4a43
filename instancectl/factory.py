"""Universal service factory.

Provides :func:`build_gateway` and :func:`universal_factory`, the
entry-points for creating provider clients. Both dispatch to the
provider-specific registry based on ``cloud_provider``; ``@overload``
signatures keep the returned service typed so IDEs can autocomplete it.
"""

from typing import overload, Literal, Any

from instancectl.base import (
    ApiGatewayBlueprint,
    ComputeBlueprint,
    existing_services,
    existing_cloud_providers,
)
from instancectl.base.config import OvhConfig
from instancectl.ovhcloud.factory import GATEWAY as OVH_GATEWAY
from instancectl.ovhcloud.factory import SERVICE_REGISTRY as OVH_SERVICES
from instancectl.ovhcloud.probe import Prober
from instancectl.ovhcloud.resolver import Resolver


# cloud_provider -> (gateway class, service registry)
_FACTORY_REGISTRY: dict[str, tuple[type, dict[str, type]]] = {
    "ovh": (OVH_GATEWAY, OVH_SERVICES),
}


def _provider(cloud_provider: str) -> tuple[type, dict[str, type]]:
    if cloud_provider not in _FACTORY_REGISTRY:
        raise ValueError(f"Unsupported cloud provider: {cloud_provider}")
    return _FACTORY_REGISTRY[cloud_provider]


def build_gateway(cloud_provider: existing_cloud_providers, config: OvhConfig) -> ApiGatewayBlueprint:
    """Create the authenticated gateway for *cloud_provider*.

    Raises:
        ValueError: If the cloud provider is not supported.
    """
    gateway_class, _ = _provider(cloud_provider)
    return gateway_class(config)  # type: ignore[no-any-return]


@overload
def universal_factory(
    service_name: Literal["prober"], cloud_provider: existing_cloud_providers, gateway: ApiGatewayBlueprint
) -> Prober: ...


@overload
def universal_factory(
    service_name: Literal["resolver"], cloud_provider: existing_cloud_providers, gateway: ApiGatewayBlueprint
) -> Resolver: ...


@overload
def universal_factory(
    service_name: Literal["compute"], cloud_provider: existing_cloud_providers, gateway: ApiGatewayBlueprint
) -> ComputeBlueprint: ...


def universal_factory(
    service_name: existing_services,
    cloud_provider: existing_cloud_providers,
    gateway: ApiGatewayBlueprint,
) -> Any:
    """
    Create a service instance bound to an existing gateway.
    Args:
        service_name: The name of the service (e.g., 'resolver').
        cloud_provider: The cloud provider (e.g., 'ovh').
        gateway: Gateway the service issues its requests through.
    Returns:
        An instance of the requested service class.
    Raises:
        ValueError: If the cloud provider or service is not supported.
    """
    _, provider_services = _provider(cloud_provider)

    if service_name not in provider_services:
        raise ValueError(
            f"Unsupported service '{service_name}' for provider '{cloud_provider}'"
        )

    return provider_services[service_name](gateway)
