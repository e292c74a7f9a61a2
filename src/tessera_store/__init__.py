"""Typed records on a schemaless key-value store.

Provides the attribute codec, the store client port with its DynamoDB
implementation, and a generic repository for entity tables.
"""

from tessera_store.client import KeyValueStoreClient, Page
from tessera_store.exceptions import (
    AttributeDecodeError,
    ConditionalCheckFailedError,
    EntityAlreadyExistsError,
    StoreError,
)
from tessera_store.repository import DynamoDBRepository

__all__ = [
    "AttributeDecodeError",
    "ConditionalCheckFailedError",
    "DynamoDBRepository",
    "EntityAlreadyExistsError",
    "KeyValueStoreClient",
    "Page",
    "StoreError",
]
