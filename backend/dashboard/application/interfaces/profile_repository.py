"""Abstract repository interface (port) for user profiles."""

from abc import ABC, abstractmethod


class ProfileRepository(ABC):
    """Port for ``perfiles`` lookups."""

    @abstractmethod
    async def get_linked_executive_ids(self) -> set[int]:
        """Every non-null ``ejecutivo_id`` any profile has ever been linked to."""
        ...
