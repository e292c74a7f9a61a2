"""Abstract key-value store client.

This interface defines the narrow set of store primitives the repositories
need. It is generic across tables: every call names the table it targets.
Implementations can use DynamoDB or any store with point reads, secondary
index queries, paginated scans, conditional puts and attribute updates.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from tessera_store.codec import AttributeMap, AttributeValue


@dataclass(frozen=True)
class Page:
    """One page of a query or scan.

    ``last_evaluated_key`` is the continuation cursor; ``None`` means the
    result set is exhausted.
    """

    items: list[AttributeMap] = field(default_factory=list)
    last_evaluated_key: AttributeMap | None = None

    @property
    def has_more(self) -> bool:
        return bool(self.last_evaluated_key)


class KeyValueStoreClient(ABC):
    """Async key-value store primitives used by all repositories."""

    @abstractmethod
    async def get_item(
        self,
        table: str,
        key: AttributeMap,
        consistent_read: bool = True,
    ) -> AttributeMap | None:
        """Read one item by primary key.

        Returns
        -------
        The item, or None if no item has that key
        """

    @abstractmethod
    async def query(  # noqa: PLR0913
        self,
        table: str,
        index_name: str,
        key_name: str,
        key_value: AttributeValue,
        limit: int | None = None,
        exclusive_start_key: AttributeMap | None = None,
    ) -> Page:
        """Query a secondary index for items whose ``key_name`` equals ``key_value``."""

    @abstractmethod
    async def scan(
        self,
        table: str,
        limit: int | None = None,
        exclusive_start_key: AttributeMap | None = None,
    ) -> Page:
        """Read one page of a full-table scan."""

    @abstractmethod
    async def put_item(
        self,
        table: str,
        item: AttributeMap,
        condition_attribute_not_exists: str | None = None,
    ) -> None:
        """Write an item.

        Raises
        ------
        ConditionalCheckFailedError
            If ``condition_attribute_not_exists`` is given and the stored
            item already has that attribute
        """

    @abstractmethod
    async def update_item(
        self,
        table: str,
        key: AttributeMap,
        updates: AttributeMap,
    ) -> None:
        """Set each attribute in ``updates`` on the item with ``key``."""

    @abstractmethod
    async def delete_item(self, table: str, key: AttributeMap) -> None:
        """Delete the item with ``key``; deleting a missing item is not an error."""
