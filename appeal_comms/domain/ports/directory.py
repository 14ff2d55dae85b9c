"""
Outbound port for donor lookup.

Donor storage and CRUD live elsewhere; the dispatch core only reads.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from ..models import Recipient


class Directory(ABC):
    """Read-only access to donors."""

    @abstractmethod
    async def find_by_ids(self, ids: Iterable[int]) -> list[Recipient]:
        """Return the donors that exist among ``ids``; unknown ids are omitted."""
        ...

    @abstractmethod
    async def find_all_for_resource(self, resource_id: int) -> list[Recipient]:
        """Return every donor linked to an appeal."""
        ...

    @abstractmethod
    async def search(self, keyword: str) -> list[Recipient]:
        """Case-insensitive match on donor name or email."""
        ...
