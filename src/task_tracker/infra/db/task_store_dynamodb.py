from __future__ import annotations

import asyncio
from typing import Any, List, Optional

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError as ModelValidationError

from task_tracker.domain.errors import ConnectivityError, ReadError, WriteError
from task_tracker.domain.task_models import Task, TaskCreate, newest_first

_BOTO_ERRORS = (BotoCoreError, ClientError)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _error_message(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        err = exc.response.get("Error", {})
        return err.get("Message") or err.get("Code") or str(exc)
    return str(exc)


def to_dynamo_item(item: dict) -> dict:
    return {k: _serializer.serialize(v) for k, v in item.items()}


def from_dynamo_item(item: dict) -> dict:
    return {k: _deserializer.deserialize(v) for k, v in item.items()}


class DynamoTaskStore:
    """
    Tasks in a single DynamoDB table keyed by `taskId`.

    Credentials come from the default boto3 chain (env vars, shared config,
    or the pod's web identity token). boto3 is blocking, so every call runs
    in a worker thread; the low-level client is used because, unlike a
    resource, it may be shared between those threads.
    """

    def __init__(self, table_name: str, region_name: str, client: Optional[Any] = None):
        self.table_name = table_name
        self.region_name = region_name
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("dynamodb", region_name=self.region_name)
        return self._client

    async def open(self) -> None:
        pass

    async def close(self) -> None:
        pass

    async def probe_connectivity(self) -> None:
        try:
            await asyncio.to_thread(self.client.scan, TableName=self.table_name, Limit=1)
        except _BOTO_ERRORS as e:
            raise ConnectivityError(f"DynamoDB connection failed: {_error_message(e)}") from e

    async def insert_task(self, title: str, description: str) -> Task:
        task = Task.new(TaskCreate(title=title, description=description))
        try:
            await asyncio.to_thread(
                self.client.put_item,
                TableName=self.table_name,
                Item=to_dynamo_item(task.to_item()),
            )
        except _BOTO_ERRORS as e:
            raise WriteError(f"Failed to create task: {_error_message(e)}") from e
        return task

    async def list_tasks(self) -> List[Task]:
        # One scan call. LastEvaluatedKey is not followed: tables past 1 MB
        # return a truncated list.
        try:
            resp = await asyncio.to_thread(self.client.scan, TableName=self.table_name)
        except _BOTO_ERRORS as e:
            raise ReadError(f"Failed to retrieve tasks: {_error_message(e)}") from e

        # The table has no schema; an item this app did not write may lack fields.
        # Numbers come back as Decimal; pydantic coerces integral Decimals to int.
        try:
            tasks = [Task.model_validate(from_dynamo_item(item)) for item in resp.get("Items") or []]
        except (ModelValidationError, TypeError) as e:
            raise ReadError(f"Failed to retrieve tasks: {e}") from e
        return newest_first(tasks)
