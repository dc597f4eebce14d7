"""
Test configuration and fixtures
"""

import boto3
import pytest

from router import Router
from settings import Settings
from store import InMemoryStore


class RecordingStore(InMemoryStore):
    """In-memory store that remembers every call made against it."""

    def __init__(self, objects=None):
        super().__init__(objects)
        self.calls = []

    def list(self, bucket):
        self.calls.append(("list", bucket))
        return super().list(bucket)

    def put(self, bucket, key, body):
        self.calls.append(("put", bucket, key, body))
        super().put(bucket, key, body)

    def delete(self, bucket, key):
        self.calls.append(("delete", bucket, key))
        super().delete(bucket, key)


@pytest.fixture
def bucket_name():
    return "items-test-bucket"


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def router(bucket_name, store):
    return Router(Settings(bucket_name=bucket_name), store)


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
