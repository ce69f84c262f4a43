"""OVHcloud service factory.

Maps service names to their OVHcloud implementations and builds the
gateway they share. ``SERVICE_REGISTRY`` and ``GATEWAY`` are consumed by
:func:`instancectl.factory.universal_factory`.
"""

from instancectl.ovhcloud.gateway import Gateway
from instancectl.ovhcloud.probe import Prober
from instancectl.ovhcloud.resolver import Resolver
from instancectl.ovhcloud.compute import Compute


GATEWAY: type = Gateway

# Service registry for OVHcloud
SERVICE_REGISTRY: dict[str, type] = {
    "prober": Prober,
    "resolver": Resolver,
    "compute": Compute,
}
