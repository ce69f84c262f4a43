"""
Pydantic models for provider resources.

Provider listings carry many more fields than these; extras are ignored so
the models only pin down what resolution and lifecycle decisions read.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Instance(BaseModel):
    """A compute instance as observed in the latest listing."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    status: str


class NamedResource(BaseModel):
    """An ``{id, name}`` pair from a provider listing (SSH key, flavor, image)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str

    def label(self) -> str:
        return f"{self.name} ({self.id})"


class CreateRequest(BaseModel):
    """Body of the instance creation call, built from resolved identifiers."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    flavor_id: str = Field(alias="flavorId")
    image_id: str = Field(alias="imageId")
    name: str
    region: str
    ssh_key_id: str = Field(alias="sshKeyId")

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class Action(str, Enum):
    """State-changing call chosen by the lifecycle engine."""

    CREATE = "create"
    START = "start"
    DELETE = "delete"
    SHELVE = "shelve"
    NONE = "none"


class TransitionOutcome(BaseModel):
    """Result of one lifecycle run."""

    operation: str
    action: Action
    instance_id: str | None = None
    issued: bool = False
    detail: str = ""
