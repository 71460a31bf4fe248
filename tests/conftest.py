"""Shared fixtures: in-memory stand-ins for the DynamoDB Users table."""
import pytest
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import ClientError
from typing import Dict, Any


class FakeTable:
    """Keeps items in a dict keyed by userId, like a single-key DynamoDB table.

    Writes go through boto3's TypeSerializer so values DynamoDB cannot
    store fail here the same way they fail against a real table.
    """

    def __init__(self):
        self.items: Dict[Any, Dict[str, Any]] = {}
        self.calls = []

    def get_item(self, Key):
        self.calls.append(("get_item", Key))
        item = self.items.get(Key["userId"])
        if item is None:
            return {}
        return {"Item": dict(item)}

    def put_item(self, Item):
        self.calls.append(("put_item", Item))
        serializer = TypeSerializer()
        for value in Item.values():
            serializer.serialize(value)
        if "userId" not in Item:
            raise ClientError(
                {
                    "Error": {
                        "Code": "ValidationException",
                        "Message": "One or more parameter values were invalid: "
                                   "Missing the key userId in the item",
                    },
                    "ResponseMetadata": {"HTTPStatusCode": 400, "RequestId": "req-missing-key"},
                },
                "PutItem",
            )
        self.items[Item["userId"]] = dict(Item)
        return {}


class FailingTable(FakeTable):
    """Every store call fails as an unreachable table would."""

    error = ClientError(
        {
            "Error": {
                "Code": "ResourceNotFoundException",
                "Message": "Requested resource not found",
            },
            "ResponseMetadata": {"HTTPStatusCode": 400, "RequestId": "req-123"},
        },
        "GetItem",
    )

    def get_item(self, Key):
        self.calls.append(("get_item", Key))
        raise self.error

    def put_item(self, Item):
        self.calls.append(("put_item", Item))
        raise self.error


@pytest.fixture
def table():
    return FakeTable()


@pytest.fixture
def failing_table():
    return FailingTable()
