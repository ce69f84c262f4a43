"""Resolution of operator-supplied names into OVHcloud identifiers.

Each lookup fetches its listing fresh and fails fast with a
:class:`~instancectl.base.exceptions.ResourceNotFoundError` that enumerates
every candidate, so the operator can see what the project actually offers.
Matching is first-match-wins; duplicates in a listing are not reported.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from instancectl.base.async_support import AsyncMixin
from instancectl.base.exceptions import ResourceNotFoundError
from instancectl.base.gateway import ApiGatewayBlueprint
from instancectl.base.models import NamedResource


def _first(
    items: Iterable[NamedResource],
    predicate: Callable[[NamedResource], bool],
) -> NamedResource | None:
    for item in items:
        if predicate(item):
            return item
    return None


class Resolver(AsyncMixin):
    """Project, region, SSH key, flavor and image lookups.

    Attributes:
        gateway: Gateway the listings are fetched through.
    """

    def __init__(self, gateway: ApiGatewayBlueprint) -> None:
        self.gateway = gateway

    def _named(self, path: str, **params: Any) -> list[NamedResource]:
        return [NamedResource.model_validate(item) for item in self.gateway.get(path, **params)]

    def resolve_project(self, name: str) -> str:
        """Check that *name* is one of the accessible projects.

        Returns:
            The project identifier (the name itself).

        Raises:
            ResourceNotFoundError: Listing every accessible project.
        """
        projects: list[str] = self.gateway.get("/cloud/project")
        if name not in projects:
            raise ResourceNotFoundError("project", name, projects)
        return name

    def resolve_region(self, project: str, name: str) -> str:
        """Check that *name* is one of the project's regions."""
        regions: list[str] = self.gateway.get(f"/cloud/project/{project}/region")
        if name not in regions:
            raise ResourceNotFoundError("region", name, regions)
        return name

    def resolve_ssh_key(self, project: str, identifier: str) -> NamedResource:
        """Find an SSH key by id or name, ignoring case.

        Raises:
            ResourceNotFoundError: Listing every key as ``name (id)``.
        """
        keys = self._named(f"/cloud/project/{project}/sshkey")
        wanted = identifier.lower()
        key = _first(keys, lambda k: k.id.lower() == wanted or k.name.lower() == wanted)
        if key is None:
            raise ResourceNotFoundError("sshKey", identifier, [k.label() for k in keys])
        return key

    def resolve_flavor(self, project: str, region: str, name: str) -> NamedResource:
        """Find a flavor of *region* by exact name."""
        flavors = self._named(f"/cloud/project/{project}/flavor", region=region)
        flavor = _first(flavors, lambda f: f.name == name)
        if flavor is None:
            raise ResourceNotFoundError("flavor", name, [f.name for f in flavors])
        return flavor

    def resolve_image(
        self,
        project: str,
        region: str,
        flavor_id: str,
        name: str,
    ) -> NamedResource:
        """Find a Linux image compatible with *flavor_id* in *region* by exact name."""
        images = self._named(
            f"/cloud/project/{project}/image",
            flavorType=flavor_id,
            osType="linux",
            region=region,
        )
        image = _first(images, lambda i: i.name == name)
        if image is None:
            raise ResourceNotFoundError("image", name, [i.name for i in images])
        return image
