"""Compute (instance) service blueprint."""

from abc import ABC, abstractmethod

from instancectl.base.async_support import async_wrap
from instancectl.base.models import CreateRequest, Instance


class ComputeBlueprint(ABC):
    """Abstract interface for the instance lifecycle within one project.

    Each method is a single fire-and-forget request: none of them waits for
    the provider to finish the transition.
    """

    @abstractmethod
    def create_instance(self, project: str, request: CreateRequest) -> Instance:
        """Request a new instance and return it as acknowledged by the provider.

        Args:
            project: Project identifier.
            request: Resolved flavor, image, region and SSH key identifiers.
        """

    @abstractmethod
    def start_instance(self, project: str, instance_id: str) -> None:
        """Start a stopped instance."""

    @abstractmethod
    def delete_instance(self, project: str, instance_id: str) -> None:
        """Delete an instance (hard stop)."""

    @abstractmethod
    def shelve_instance(self, project: str, instance_id: str) -> None:
        """Shelve an instance (soft stop, disk kept)."""

    @abstractmethod
    def list_instances(self, project: str) -> list[Instance]:
        """List every instance of the project."""

    def find_instance(self, project: str, name: str) -> Instance | None:
        """Return the first instance whose name equals *name*, or None.

        The listing is fetched on every call. Absence is a normal outcome,
        callers decide whether it is terminal.
        """
        for instance in self.list_instances(project):
            if instance.name == name:
                return instance
        return None

    afind_instance = async_wrap(find_instance)
