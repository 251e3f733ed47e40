"""Resource status port interface for dependency inversion."""

from abc import ABC, abstractmethod
from typing import List, Optional

from provisioning_core.domain.operation.operation import (
    Operation,
    ProvisionedResource,
    ResourceKind,
)


class ResourceStatusPort(ABC):
    """
    Port interface for fetching fresh remote state.

    Every call goes to the provider; implementations must not cache. A
    failure that may succeed on retry is raised as TransientProviderError.
    """

    @abstractmethod
    def get_instance(self, scope: str, name: str) -> Optional[ProvisionedResource]:
        """
        Fetch an instance.

        Args:
            scope: Enclosing scope such as a region or resource group
            name: Instance name or id

        Returns:
            The instance, or None when it does not exist
        """
        pass

    @abstractmethod
    def get_operation(self, operation_id: str) -> Optional[Operation]:
        """Fetch an operation by id, None when unknown."""
        pass

    @abstractmethod
    def get_resource(self, kind: ResourceKind, scope: str, name: str) -> Optional[ProvisionedResource]:
        pass

    @abstractmethod
    def list_resource_names(self, kind: ResourceKind, scope: str, deleted: bool = False) -> List[str]:
        """
        List the names of resources of a kind in a scope.

        Args:
            kind: Resource kind
            scope: Enclosing scope
            deleted: List soft-deleted resources instead of live ones

        Returns:
            Resource names
        """
        pass
