import logging
from typing import Protocol

from botocore.exceptions import BotoCoreError, ClientError

from errors import StoreError

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    def list(self, bucket: str) -> list[str]: ...

    def put(self, bucket: str, key: str, body: bytes) -> None: ...

    def delete(self, bucket: str, key: str) -> None: ...


class S3Store:
    """Object store backed by a boto3 S3 client.

    Credentials, signing and retries are left to the client. With
    ``paginate=False`` only the first ListObjectsV2 page is read.
    """

    def __init__(self, client, paginate=True):
        self.client = client
        self.paginate = paginate

    def list(self, bucket):
        keys, token = [], None
        while True:
            kwargs = {"Bucket": bucket}
            if token:
                kwargs["ContinuationToken"] = token
            logger.debug("list_objects_v2 bucket=%s continuation=%s", bucket, bool(token))
            try:
                resp = self.client.list_objects_v2(**kwargs)
            except (ClientError, BotoCoreError) as e:
                logger.exception("Listing s3://%s failed", bucket)
                raise StoreError("list", bucket) from e
            for obj in resp.get("Contents", []):
                key = obj.get("Key")
                if key:
                    keys.append(key)
            token = resp.get("NextContinuationToken") if resp.get("IsTruncated") else None
            if not (self.paginate and token):
                break
        return keys

    def put(self, bucket, key, body):
        logger.debug("put_object s3://%s/%s (%d bytes)", bucket, key, len(body))
        try:
            self.client.put_object(Bucket=bucket, Key=key, Body=body)
        except (ClientError, BotoCoreError) as e:
            logger.exception("Writing s3://%s/%s failed", bucket, key)
            raise StoreError("put", bucket, key) from e

    def delete(self, bucket, key):
        # S3 answers 204 for keys that never existed; that is passed through as success.
        logger.debug("delete_object s3://%s/%s", bucket, key)
        try:
            self.client.delete_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.exception("Deleting s3://%s/%s failed", bucket, key)
            raise StoreError("delete", bucket, key) from e


class InMemoryStore:
    """Dict-backed store for tests and local runs."""

    def __init__(self, objects=None):
        self.buckets: dict[str, dict[str, bytes]] = {}
        for bucket, items in (objects or {}).items():
            self.buckets[bucket] = dict(items)

    def list(self, bucket):
        return sorted(self.buckets.get(bucket, {}))

    def put(self, bucket, key, body):
        self.buckets.setdefault(bucket, {})[key] = bytes(body)

    def delete(self, bucket, key):
        self.buckets.get(bucket, {}).pop(key, None)
