"""
Pydantic configuration model for the OVHcloud API.

The configuration is built once at the process boundary and passed
explicitly to every component. Values come from the explicit dict first and
fall back to environment variables; the per-operation required set is
checked by :meth:`OvhConfig.require` before any network access.
"""

from __future__ import annotations

import os
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from instancectl.base.exceptions import MissingConfigurationError


# Field name -> environment variables consulted, in order.
ENV_MAP: dict[str, tuple[str, ...]] = {
    "endpoint": ("OVH_ENDPOINT",),
    "application_key": ("OVH_APPLICATION_KEY",),
    "application_secret": ("OVH_APPLICATION_SECRET",),
    "consumer_key": ("OVH_CONSUMER_KEY",),
    "service_name": ("OVH_SERVICE_NAME",),
    "instance_name": ("OVH_INSTANCE_NAME", "INSTANCE_NAME"),
    "ssh_key": ("OVH_SSH_KEY",),
    "flavor_name": ("OVH_FLAVOR_NAME",),
    "image_name": ("OVH_IMAGE_NAME",),
    "region": ("OVH_REGION",),
}

_CREDENTIALS: tuple[str, ...] = (
    "endpoint",
    "application_key",
    "application_secret",
    "consumer_key",
    "service_name",
)

REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "start": _CREDENTIALS + ("instance_name",),
    "create": _CREDENTIALS + ("ssh_key", "flavor_name", "image_name", "region", "instance_name"),
    "stop": _CREDENTIALS + ("instance_name",),
    "shelve": _CREDENTIALS + ("instance_name",),
}


class OvhConfig(BaseModel):
    """Configuration for one instancectl invocation.

    Values are resolved in order:
    1. Explicit values passed in the config dict.
    2. Environment variables (see :data:`ENV_MAP`).
    3. Otherwise left as None; :meth:`require` reports them.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    endpoint: str | None = Field(default=None, description="API endpoint (e.g. 'ovh-eu')")
    application_key: str | None = Field(default=None, description="Application key")
    application_secret: str | None = Field(default=None, description="Application secret")
    consumer_key: str | None = Field(default=None, description="Consumer key")
    service_name: str | None = Field(default=None, description="Public Cloud project")
    instance_name: str | None = Field(default=None, description="Target instance name")
    ssh_key: str | None = Field(default=None, description="SSH key id or name")
    flavor_name: str | None = Field(default=None, description="Flavor name (e.g. 'b3-8')")
    image_name: str | None = Field(default=None, description="Image name (e.g. 'Ubuntu 24.10')")
    region: str | None = Field(default=None, description="Region name (e.g. 'GRA11')")
    max_attempts: int = Field(default=3, ge=1, description="Attempts for read calls")
    timeout: int = Field(default=180, gt=0, description="Request timeout in seconds")

    @model_validator(mode="before")
    @classmethod
    def resolve_from_env(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Fall back to environment variables for missing values."""
        values = dict(values)
        for field, env_vars in ENV_MAP.items():
            if values.get(field):
                continue
            for env_var in env_vars:
                if os.environ.get(env_var):
                    values[field] = os.environ[env_var]
                    break
        return values

    def require(self, operation: str) -> None:
        """Check that every parameter needed by *operation* is set.

        Args:
            operation: One of the keys of :data:`REQUIRED_FIELDS`.

        Raises:
            ValueError: If the operation is unknown.
            MissingConfigurationError: Naming every absent or empty parameter.
        """
        required = REQUIRED_FIELDS.get(operation)
        if required is None:
            raise ValueError(f"Unknown operation: {operation}")
        missing = [field for field in required if not getattr(self, field)]
        if missing:
            raise MissingConfigurationError(
                operation,
                missing,
                [ENV_MAP[field][0] for field in missing],
            )


def validate_config(operation: str, config: dict[str, Any]) -> OvhConfig:
    """Build the configuration and check it for *operation*.

    Args:
        operation: Requested operation (``create``, ``start``, ``stop``, ``shelve``).
        config: Raw configuration dictionary.

    Returns:
        A validated :class:`OvhConfig`.

    Raises:
        MissingConfigurationError: If a required parameter is absent.
        pydantic.ValidationError: If the config has unknown or malformed fields.
    """
    cfg = OvhConfig(**config)
    cfg.require(operation)
    return cfg


__all__ = [
    "ENV_MAP",
    "REQUIRED_FIELDS",
    "OvhConfig",
    "validate_config",
]
