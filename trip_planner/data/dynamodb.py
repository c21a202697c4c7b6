"""
Thin boto3 wrapper over the single DynamoDB table holding trip projects.

Every item is addressed by string ``PK``/``SK`` attributes. Point the client
at DynamoDB Local by passing ``endpoint_url`` (``DYNAMODB_ENDPOINT``).
"""

from collections.abc import Iterable
from typing import Any

import boto3
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)

TableKey = tuple[str, str]


def _key(pk: str, sk: str) -> dict[str, str]:
    return {"PK": pk, "SK": sk}


class DynamoDBClient:
    def __init__(
        self,
        table_name: str,
        region: str = "ap-northeast-1",
        endpoint_url: str | None = None,
    ):
        self.table_name = table_name
        resource_kwargs: dict[str, Any] = {"region_name": region}
        if endpoint_url:
            resource_kwargs["endpoint_url"] = endpoint_url
            logger.info(f"DynamoDB table {table_name} served by {endpoint_url}")
        self.table = boto3.resource("dynamodb", **resource_kwargs).Table(table_name)

    def put_item(self, item: dict[str, Any]) -> None:
        self.table.put_item(Item=item)

    def get_item(self, pk: str, sk: str) -> dict[str, Any] | None:
        return self.table.get_item(Key=_key(pk, sk)).get("Item")

    def delete_item(self, pk: str, sk: str) -> None:
        self.table.delete_item(Key=_key(pk, sk))

    def query(
        self,
        pk: str,
        sk_prefix: str | None = None,
        limit: int | None = None,
        scan_forward: bool = True,
    ) -> list[dict[str, Any]]:
        """
        All items of a partition, optionally restricted to a sort key prefix.

        Pages through ``LastEvaluatedKey`` until the partition is exhausted
        or ``limit`` items were read.
        """
        condition = Key("PK").eq(pk)
        if sk_prefix:
            condition &= Key("SK").begins_with(sk_prefix)

        request: dict[str, Any] = {
            "KeyConditionExpression": condition,
            "ScanIndexForward": scan_forward,
        }
        if limit:
            request["Limit"] = limit

        items: list[dict[str, Any]] = []
        while True:
            page = self.table.query(**request)
            items.extend(page.get("Items", []))
            next_key = page.get("LastEvaluatedKey")
            if next_key is None or (limit and len(items) >= limit):
                break
            request["ExclusiveStartKey"] = next_key
        return items[:limit] if limit else items

    def batch_write(
        self, items: Iterable[dict[str, Any]], deletes: Iterable[TableKey] = ()
    ) -> None:
        """Put and delete many items; boto3's batch writer splits the requests."""
        with self.table.batch_writer() as batch:
            for item in items:
                batch.put_item(Item=item)
            for pk, sk in deletes:
                batch.delete_item(Key=_key(pk, sk))

    def create_table_if_not_exists(self) -> None:
        """Create the PK/SK table on first use against DynamoDB Local."""
        try:
            self.table.load()
            return
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") != "ResourceNotFoundException":
                raise
        self.table.meta.client.create_table(
            TableName=self.table_name,
            KeySchema=[
                {"AttributeName": "PK", "KeyType": "HASH"},
                {"AttributeName": "SK", "KeyType": "RANGE"},
            ],
            AttributeDefinitions=[
                {"AttributeName": "PK", "AttributeType": "S"},
                {"AttributeName": "SK", "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        logger.info(f"Created DynamoDB table {self.table_name}")
