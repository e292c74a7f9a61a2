"""DynamoDB implementation of the key-value store client."""

from tessera_store.dynamodb.client import (
    DynamoDBStoreClient,
    build_update_expression,
    connect_dynamodb,
)

__all__ = [
    "DynamoDBStoreClient",
    "build_update_expression",
    "connect_dynamodb",
]
