"""OVHcloud provider implementations."""

from .compute import Compute
from .gateway import Gateway
from .probe import Prober
from .resolver import Resolver

__all__ = [
    "Compute",
    "Gateway",
    "Prober",
    "Resolver",
]
