"""Non-blocking data access for Item documents.

Multi-value finders are async generators: nothing reaches DynamoDB until the
first element is pulled, and each scan page is fetched only when the
consumer has drained the previous one. Single-value operations are plain
coroutines. The boto3 calls themselves block, so every one of them runs in
the threadpool.
"""

import logging
import uuid
from typing import AsyncIterator, Iterable
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool
from Models.Item import Item
from DB.DB import get_ddb_instance

logger = logging.getLogger(__name__)


class ItemReactiveRepository:
    def __init__(self, table=None):
        self.table = table if table is not None else get_ddb_instance()

    async def _call(self, operation, **kwargs):
        try:
            return await run_in_threadpool(operation, **kwargs)
        except (ClientError, BotoCoreError) as e:
            logger.error("DynamoDB %s on %s failed: %s", getattr(operation, "__name__", operation), self.table.name, e)
            raise

    async def _scan_pages(self, **scan_kwargs) -> AsyncIterator[dict]:
        while True:
            page = await self._call(self.table.scan, **scan_kwargs)
            logger.debug("Scanned %d record(s) from %s", page.get("Count", 0), self.table.name)
            yield page
            last_key = page.get("LastEvaluatedKey")
            if last_key is None:
                return
            scan_kwargs["ExclusiveStartKey"] = last_key

    async def _pages(self, **scan_kwargs) -> AsyncIterator[dict]:
        async for page in self._scan_pages(**scan_kwargs):
            for record in page.get("Items", []):
                yield record

    async def _scan(self, condition=None) -> AsyncIterator[Item]:
        scan_kwargs = {}
        if condition is not None:
            scan_kwargs["FilterExpression"] = condition
        async for record in self._pages(**scan_kwargs):
            yield Item.from_dynamodb_item(record)

    def find_all(self) -> AsyncIterator[Item]:
        return self._scan()

    async def find_by_id(self, item_id: str) -> Item | None:
        record = (await self._call(self.table.get_item, Key={"id": item_id})).get("Item")
        if record is None:
            return None
        return Item.from_dynamodb_item(record)

    def find_by_description(self, description: str) -> AsyncIterator[Item]:
        return self._scan(Attr("description").eq(description))

    def find_by_description_contains(self, fragment: str) -> AsyncIterator[Item]:
        return self._scan(Attr("description").contains(fragment))

    async def find_by_description_ending_with(self, suffix: str) -> AsyncIterator[Item]:
        # no ends-with operator in DynamoDB: narrow with contains, then check the tail
        async for item in self._scan(Attr("description").contains(suffix)):
            if item.description.endswith(suffix):
                yield item

    async def save(self, item: Item) -> Item:
        """Insert ``item``, or replace the stored record sharing its id.

        Items without an id get a fresh uuid4. The returned copy always
        carries the id it was stored under.
        """
        persisted = item if item.id else item.model_copy(update={"id": str(uuid.uuid4())})
        await self._call(self.table.put_item, Item=persisted.to_dynamodb_item())
        logger.info("Saved item %s (%s)", persisted.id, persisted.description)
        return persisted

    async def save_all(self, items: Iterable[Item]) -> AsyncIterator[Item]:
        for item in items:
            yield await self.save(item)

    async def delete_by_id(self, item_id: str) -> None:
        # deleting a missing key is a no-op in DynamoDB
        await self._call(self.table.delete_item, Key={"id": item_id})
        logger.info("Deleted item %s", item_id)

    async def delete(self, item: Item) -> None:
        await self.delete_by_id(item.id)

    async def delete_all(self) -> None:
        keys = [record async for record in self._pages(ProjectionExpression="#id",
                                                       ExpressionAttributeNames={"#id": "id"})]

        def delete_keys():
            with self.table.batch_writer() as batch:
                for key in keys:
                    batch.delete_item(Key={"id": key["id"]})

        await self._call(delete_keys)
        logger.info("Deleted %d item(s) from %s", len(keys), self.table.name)

    async def count(self) -> int:
        total = 0
        async for page in self._scan_pages(Select="COUNT"):
            total += page.get("Count", 0)
        return total

    async def exists_by_id(self, item_id: str) -> bool:
        return await self.find_by_id(item_id) is not None
