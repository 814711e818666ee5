"""Key-value store base class"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass
class KeyPage:
    """One page of a prefix listing"""

    keys: list[str] = field(default_factory=list)
    cursor: str | None = None
    list_complete: bool = True


class KeyValueStore(ABC):
    """Durable mapping from string key to string value"""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get value, None if absent"""

    @abstractmethod
    async def put(self, key: str, value: str) -> None:
        """Create or overwrite value"""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete value (no error if absent)"""

    @abstractmethod
    async def list_keys(
        self,
        prefix: str,
        cursor: str | None = None,
        limit: int = 1000,
    ) -> KeyPage:
        """
        List keys with the given prefix, one bounded page at a time

        Args:
            prefix: Key prefix
            cursor: Continuation cursor from the previous page
            limit: Maximum keys per page

        Returns:
            KeyPage; when list_complete is False, pass its cursor back
        """
