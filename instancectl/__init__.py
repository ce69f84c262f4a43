"""instancectl: lifecycle control of a single OVHcloud Public Cloud instance.

Entry point for the library. Build a configuration and run one operation::

    from instancectl import OvhConfig, run_operation

    outcome = run_operation("start", OvhConfig(instance_name="builder"))
"""

from .base import (
    ApiGatewayBlueprint,
    ComputeBlueprint,
    Action,
    Instance,
    NamedResource,
    TransitionOutcome,
)
from .base.config import OvhConfig
from .factory import build_gateway, universal_factory
from .lifecycle import LifecycleEngine, decide
from .pipeline import Pipeline, run_operation

__all__ = [
    "ApiGatewayBlueprint",
    "ComputeBlueprint",
    "Action",
    "Instance",
    "NamedResource",
    "TransitionOutcome",
    "OvhConfig",
    "build_gateway",
    "universal_factory",
    "LifecycleEngine",
    "decide",
    "Pipeline",
    "run_operation",
]
