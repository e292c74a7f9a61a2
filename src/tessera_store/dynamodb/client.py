"""DynamoDB implementation of KeyValueStoreClient.

Wraps an aioboto3 low-level DynamoDB client. Items travel in DynamoDB's
native attribute-value format, which is exactly what the attribute codec
produces, so no further translation happens here beyond building
expressions.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from tessera_store.client import KeyValueStoreClient, Page
from tessera_store.codec import AttributeMap, AttributeValue
from tessera_store.exceptions import ConditionalCheckFailedError

logger = logging.getLogger(__name__)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def build_update_expression(
    updates: AttributeMap,
) -> tuple[str, dict[str, str], dict[str, AttributeValue]]:
    """Build a ``SET #Attr = :val_Attr, ...`` expression for ``updates``.

    Returns
    -------
    Tuple of (update expression, attribute names, attribute values)
    """
    assignments: list[str] = []
    names: dict[str, str] = {}
    values: dict[str, AttributeValue] = {}

    for attribute_name, attribute_value in updates.items():
        alias = f"#{attribute_name}"
        value_key = f":val_{attribute_name}"
        assignments.append(f"{alias} = {value_key}")
        names[alias] = attribute_name
        values[value_key] = attribute_value

    return "SET " + ", ".join(assignments), names, values


class DynamoDBStoreClient(KeyValueStoreClient):
    """
    DynamoDB implementation of KeyValueStoreClient.

    Transport faults are logged and re-raised unchanged; only a failed
    write condition is translated into ConditionalCheckFailedError so
    repositories can react to it.
    """

    def __init__(self, client: Any):
        """Initialize with an open aioboto3 DynamoDB client.

        Parameters
        ----------
        client
            Low-level client from ``aioboto3.Session().client("dynamodb")``
        """
        self._client = client

    async def get_item(
        self,
        table: str,
        key: AttributeMap,
        consistent_read: bool = True,
    ) -> AttributeMap | None:
        try:
            response = await self._client.get_item(
                TableName=table,
                Key=key,
                ConsistentRead=consistent_read,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("GetItem failed on %s: %s", table, e)
            raise

        item = response.get("Item")
        return item or None

    async def query(  # noqa: PLR0913
        self,
        table: str,
        index_name: str,
        key_name: str,
        key_value: AttributeValue,
        limit: int | None = None,
        exclusive_start_key: AttributeMap | None = None,
    ) -> Page:
        request: dict[str, Any] = {
            "TableName": table,
            "IndexName": index_name,
            "KeyConditionExpression": "#key = :key",
            "ExpressionAttributeNames": {"#key": key_name},
            "ExpressionAttributeValues": {":key": key_value},
        }
        if limit is not None:
            request["Limit"] = limit
        if exclusive_start_key:
            request["ExclusiveStartKey"] = exclusive_start_key

        try:
            response = await self._client.query(**request)
        except (BotoCoreError, ClientError) as e:
            logger.error("Query on %s.%s failed: %s", table, index_name, e)
            raise

        return Page(
            items=response.get("Items", []),
            last_evaluated_key=response.get("LastEvaluatedKey"),
        )

    async def scan(
        self,
        table: str,
        limit: int | None = None,
        exclusive_start_key: AttributeMap | None = None,
    ) -> Page:
        request: dict[str, Any] = {"TableName": table}
        if limit is not None:
            request["Limit"] = limit
        if exclusive_start_key:
            request["ExclusiveStartKey"] = exclusive_start_key

        try:
            response = await self._client.scan(**request)
        except (BotoCoreError, ClientError) as e:
            logger.error("Scan failed on %s: %s", table, e)
            raise

        return Page(
            items=response.get("Items", []),
            last_evaluated_key=response.get("LastEvaluatedKey"),
        )

    async def put_item(
        self,
        table: str,
        item: AttributeMap,
        condition_attribute_not_exists: str | None = None,
    ) -> None:
        request: dict[str, Any] = {"TableName": table, "Item": item}
        if condition_attribute_not_exists:
            request["ConditionExpression"] = "attribute_not_exists(#key)"
            request["ExpressionAttributeNames"] = {
                "#key": condition_attribute_not_exists,
            }

        try:
            await self._client.put_item(**request)
        except ClientError as e:
            if condition_attribute_not_exists and (
                _error_code(e) == CONDITIONAL_CHECK_FAILED
            ):
                raise ConditionalCheckFailedError(
                    table,
                    f"attribute_not_exists({condition_attribute_not_exists})",
                ) from e
            logger.error("PutItem failed on %s: %s", table, e)
            raise
        except BotoCoreError as e:
            logger.error("PutItem failed on %s: %s", table, e)
            raise

    async def update_item(
        self,
        table: str,
        key: AttributeMap,
        updates: AttributeMap,
    ) -> None:
        if not updates:
            return

        expression, names, values = build_update_expression(updates)
        try:
            await self._client.update_item(
                TableName=table,
                Key=key,
                UpdateExpression=expression,
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error("UpdateItem failed on %s: %s", table, e)
            raise

    async def delete_item(self, table: str, key: AttributeMap) -> None:
        try:
            await self._client.delete_item(TableName=table, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error("DeleteItem failed on %s: %s", table, e)
            raise


@asynccontextmanager
async def connect_dynamodb(
    region_name: str,
    endpoint_url: str | None = None,
    aws_access_key_id: str | None = None,
    aws_secret_access_key: str | None = None,
) -> AsyncIterator[DynamoDBStoreClient]:
    """Open a DynamoDB client for the duration of the context.

    Parameters
    ----------
    region_name
        AWS region, e.g. "us-east-1"
    endpoint_url
        Override endpoint (DynamoDB Local, LocalStack)
    aws_access_key_id
        Explicit access key; falls back to the default credential chain
    aws_secret_access_key
        Explicit secret key; falls back to the default credential chain
    """
    session = aioboto3.Session(
        aws_access_key_id=aws_access_key_id,
        aws_secret_access_key=aws_secret_access_key,
        region_name=region_name,
    )
    async with session.client("dynamodb", endpoint_url=endpoint_url) as client:
        logger.debug("Opened DynamoDB client (region=%s)", region_name)
        yield DynamoDBStoreClient(client)
