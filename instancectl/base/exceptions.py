"""
instancectl exception hierarchy.

Every failure is a subclass of :class:`InstanceCtlError`. Each exception
carries its diagnostic fields as attributes and exposes them through
:meth:`InstanceCtlError.details` so the CLI can surface every field, not
just the message.
"""

from __future__ import annotations

from typing import Any


# ── Base ──────────────────────────────────────────────────────────────
class InstanceCtlError(Exception):
    """Root exception for all instancectl errors."""

    def __init__(self, message: str, **fields: Any) -> None:
        super().__init__(message)
        self.message = message
        self._fields = fields
        for key, value in fields.items():
            setattr(self, key, value)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def details(self) -> dict[str, Any]:
        """Return every field of the error, including its kind and message."""
        return {"kind": self.kind, "message": self.message, **self._fields}


# ── Configuration ─────────────────────────────────────────────────────
class ConfigurationError(InstanceCtlError):
    """Base exception for configuration problems."""


class MissingConfigurationError(ConfigurationError):
    """One or more required parameters are absent or empty."""

    def __init__(self, operation: str, missing: list[str], env_vars: list[str]) -> None:
        super().__init__(
            f"Missing required configuration for '{operation}': "
            + ", ".join(f"{name} ({env})" for name, env in zip(missing, env_vars)),
            operation=operation,
            missing=list(missing),
            env_vars=list(env_vars),
        )


# ── Gateway ───────────────────────────────────────────────────────────
class GatewayError(InstanceCtlError):
    """Base exception for API gateway failures.

    ``payload`` is the provider error forwarded as-is.
    """

    def __init__(self, message: str, payload: dict[str, Any] | None = None, **fields: Any) -> None:
        super().__init__(message, payload=payload or {}, **fields)


class ApiUnavailableError(GatewayError):
    """The API could not be reached."""


class UnauthorizedError(GatewayError):
    """The credentials were rejected or lack the required grants."""


class ProviderRequestError(GatewayError):
    """The provider rejected a request for any other reason."""


# ── Resolution ────────────────────────────────────────────────────────
class ResolutionError(InstanceCtlError):
    """Base exception for name-to-identifier resolution."""


class ResourceNotFoundError(ResolutionError):
    """A named reference is not present in the provider listing."""

    def __init__(self, kind: str, name: str, candidates: list[str]) -> None:
        super().__init__(
            f"{kind} '{name}' not found in available {kind}s: {', '.join(candidates)}",
            resource_kind=kind,
            name=name,
            candidates=list(candidates),
        )


# ── Compute ───────────────────────────────────────────────────────────
class ComputeError(InstanceCtlError):
    """Base exception for instance lifecycle operations."""


class InstanceNotFoundError(ComputeError):
    """The target instance does not exist in the project."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Instance {name} not found. Please create it first.", name=name)


class UnexpectedStateError(ComputeError):
    """The instance is in a status the requested operation will not act on."""

    def __init__(self, observed: str, instance_id: str | None = None) -> None:
        super().__init__(
            f"Instance is in unexpected state: {observed}",
            observed=observed,
            instance_id=instance_id,
        )


class TransitionRejectedError(ComputeError):
    """The provider rejected a state-changing call."""

    def __init__(
        self,
        action: str,
        instance_id: str | None,
        provider_error: dict[str, Any] | None = None,
    ) -> None:
        target = f"instance '{instance_id}'" if instance_id else "instance"
        super().__init__(
            f"Failed to {action} {target}",
            action=action,
            instance_id=instance_id,
            provider_error=provider_error or {},
        )


class UnexpectedResponseError(ComputeError):
    """The provider accepted a call but its response could not be read.

    The call took effect; ``response`` is the raw body as received.
    """

    def __init__(self, action: str, response: Any, reason: str) -> None:
        super().__init__(
            f"{action.capitalize()} request was accepted but the response is unreadable: {reason}",
            action=action,
            response=response,
            reason=reason,
        )
