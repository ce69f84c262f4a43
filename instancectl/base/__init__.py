"""Abstract service blueprints and core utilities.

Every provider implementation inherits from one of the blueprints defined
here. Import them to type-hint your own code or to add another provider.
"""

from .gateway import ApiGatewayBlueprint
from .compute import ComputeBlueprint
from .models import Action, CreateRequest, Instance, NamedResource, TransitionOutcome
from .supported_services import existing_services, existing_cloud_providers, existing_operations


__all__ = [
    "ApiGatewayBlueprint",
    "ComputeBlueprint",
    "Action",
    "CreateRequest",
    "Instance",
    "NamedResource",
    "TransitionOutcome",
    "existing_services",
    "existing_cloud_providers",
    "existing_operations",
]
