"""Generic repository over the key-value store.

Every entity table follows the same shape: primary key attribute ``Id``,
optional secondary indexes on a single attribute. Concrete repositories
inherit CRUD from :class:`DynamoDBRepository` and add index lookups via
:meth:`DynamoDBRepository._query_index`.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any, Generic, TypeVar

from tessera_store.client import KeyValueStoreClient
from tessera_store.codec import (
    ID_ATTRIBUTE,
    AttributeCodec,
    AttributeMap,
    AttributeValue,
)
from tessera_store.exceptions import (
    AttributeDecodeError,
    ConditionalCheckFailedError,
    EntityAlreadyExistsError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_PAGE_LIMIT = 100


class DynamoDBRepository(Generic[T]):
    """CRUD for one entity type stored in one table.

    Store faults are logged and re-raised; callers own retries.
    """

    def __init__(
        self,
        client: KeyValueStoreClient,
        table_name: str,
        codec: AttributeCodec[T],
    ):
        self._client = client
        self._table_name = table_name
        self._codec = codec

    @property
    def table_name(self) -> str:
        return self._table_name

    async def get_by_id(self, entity_id: Any) -> T | None:
        try:
            item = await self._client.get_item(
                self._table_name,
                self._codec.encode_key(entity_id),
                consistent_read=True,
            )
        except Exception as e:
            logger.error(
                "Failed to get %s %s from %s: %s",
                self._codec.entity_name,
                entity_id,
                self._table_name,
                e,
            )
            raise

        if item is None:
            return None
        return self._codec.decode(item)

    async def get_all(self, limit: int = DEFAULT_PAGE_LIMIT) -> list[T]:
        """Scan the table, following cursors until ``limit`` items are read."""
        results: list[T] = []
        start_key: AttributeMap | None = None

        try:
            while len(results) < limit:
                page = await self._client.scan(
                    self._table_name,
                    limit=limit,
                    exclusive_start_key=start_key,
                )
                for item in page.items:
                    results.append(self._codec.decode(item))
                    if len(results) >= limit:
                        break
                if not page.has_more:
                    break
                start_key = page.last_evaluated_key
        except Exception as e:
            logger.error("Failed to scan %s: %s", self._table_name, e)
            raise

        return results

    async def add(self, entity: T) -> None:
        """Insert a new entity.

        Raises
        ------
        EntityAlreadyExistsError
            If an item with the same ``Id`` is already stored
        """
        entity_id = self._codec.identity(entity)
        try:
            await self._client.put_item(
                self._table_name,
                self._codec.encode(entity),
                condition_attribute_not_exists=ID_ATTRIBUTE,
            )
        except ConditionalCheckFailedError as e:
            logger.warning(
                "%s %s already exists in %s",
                self._codec.entity_name,
                entity_id,
                self._table_name,
            )
            raise EntityAlreadyExistsError(
                self._codec.entity_name,
                str(entity_id),
            ) from e
        except Exception as e:
            logger.error(
                "Failed to add %s %s to %s: %s",
                self._codec.entity_name,
                entity_id,
                self._table_name,
                e,
            )
            raise

        logger.info("Created %s: %s", self._codec.entity_name, entity_id)

    async def update(self, entity: T) -> None:
        """Overwrite every non-key attribute of a stored entity."""
        entity_id = self._codec.identity(entity)
        item = self._codec.encode(entity)
        key = self._codec.encode_key(entity_id)
        updates = {name: value for name, value in item.items() if name not in key}

        try:
            await self._client.update_item(self._table_name, key, updates)
        except Exception as e:
            logger.error(
                "Failed to update %s %s in %s: %s",
                self._codec.entity_name,
                entity_id,
                self._table_name,
                e,
            )
            raise

        logger.debug("Updated %s: %s", self._codec.entity_name, entity_id)

    async def delete(self, entity_id: Any) -> None:
        try:
            await self._client.delete_item(
                self._table_name,
                self._codec.encode_key(entity_id),
            )
        except Exception as e:
            logger.error(
                "Failed to delete %s %s from %s: %s",
                self._codec.entity_name,
                entity_id,
                self._table_name,
                e,
            )
            raise

        logger.info("Deleted %s: %s", self._codec.entity_name, entity_id)

    async def _update_fields(self, entity_id: Any, **fields: Any) -> None:
        """Set only the given fields on a stored entity."""
        updates = {
            self._codec.attribute_name(field): self._codec.encode_field(field, value)
            for field, value in fields.items()
        }
        try:
            await self._client.update_item(
                self._table_name,
                self._codec.encode_key(entity_id),
                updates,
            )
        except Exception as e:
            logger.error(
                "Failed to update %s %s in %s: %s",
                self._codec.entity_name,
                entity_id,
                self._table_name,
                e,
            )
            raise

    async def _query_index(
        self,
        index_name: str,
        field: str,
        value: Any,
    ) -> list[T]:
        """Return every entity whose ``field`` equals ``value`` on ``index_name``."""
        key_name = self._codec.attribute_name(field)
        key_value: AttributeValue = self._codec.encode_field(field, value)
        results: list[T] = []
        start_key: AttributeMap | None = None

        try:
            while True:
                page = await self._client.query(
                    self._table_name,
                    index_name,
                    key_name,
                    key_value,
                    exclusive_start_key=start_key,
                )
                results.extend(self._codec.decode(item) for item in page.items)
                if not page.has_more:
                    break
                start_key = page.last_evaluated_key
        except Exception as e:
            logger.error(
                "Failed to query %s.%s: %s",
                self._table_name,
                index_name,
                e,
            )
            raise

        return results

    async def _scan_pages(self) -> AsyncIterator[list[T]]:
        """Yield the table one decoded page at a time. Maintenance use only.

        Items that fail to decode are logged and skipped so one corrupt row
        cannot stop a sweep. Callers may delete items from a page before
        asking for the next one.
        """
        start_key: AttributeMap | None = None

        while True:
            try:
                page = await self._client.scan(
                    self._table_name,
                    exclusive_start_key=start_key,
                )
            except Exception as e:
                logger.error("Failed to scan %s: %s", self._table_name, e)
                raise

            entities: list[T] = []
            for item in page.items:
                try:
                    entities.append(self._codec.decode(item))
                except AttributeDecodeError as e:
                    logger.warning(
                        "Skipping undecodable %s in %s: %s",
                        self._codec.entity_name,
                        self._table_name,
                        e,
                    )
            yield entities

            if not page.has_more:
                break
            start_key = page.last_evaluated_key
