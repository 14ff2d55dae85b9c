from abc import ABC, abstractmethod

from ..models import ResourceRecord


class ResourceRegistry(ABC):
    """Read-only access to appeals."""

    @abstractmethod
    async def get(self, resource_id: int) -> ResourceRecord | None:
        """Retrieve an appeal by ID."""
        ...
