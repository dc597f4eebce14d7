import logging
from dataclasses import dataclass, field
from typing import Mapping

from errors import ConfigurationError, ValidationError
from settings import Settings
from store import ObjectStore

logger = logging.getLogger(__name__)

HEALTH_PATH = "/health"
ITEMS_PATH = "/items"
EMPTY_LISTING = "no items"


@dataclass(frozen=True)
class Request:
    method: str
    path: str
    query: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass(frozen=True)
class Response:
    status: int
    body: str
    content_type: str = "text/plain"


def text(status, body):
    return Response(status=status, body=body)


def require_key(request: Request, method: str) -> str:
    key = (request.query or {}).get("key")
    if not key:
        raise ValidationError(f"missing ?key=... for {method} {ITEMS_PATH}")
    return key


class Router:
    """Dispatches a request to the health probe or one of the /items operations."""

    def __init__(self, settings: Settings, store: ObjectStore):
        self.settings = settings
        self.store = store

    def handle(self, request: Request) -> Response:
        method = (request.method or "").upper()

        if request.path == HEALTH_PATH and method == "GET":
            return text(200, "ok")

        if request.path != ITEMS_PATH:
            return text(404, "not found")

        bucket = self.bucket()

        if method not in ("GET", "POST", "DELETE"):
            return text(405, "method not allowed")

        try:
            if method == "GET":
                return self.list_items(bucket)
            if method == "POST":
                return self.create_item(bucket, require_key(request, method), request.body)
            return self.delete_item(bucket, require_key(request, method))
        except ValidationError as e:
            logger.warning("Rejected %s %s: %s", method, request.path, e)
            return text(400, str(e))

    def bucket(self) -> str:
        if not self.settings.bucket_name:
            raise ConfigurationError("BUCKET_NAME is not set")
        return self.settings.bucket_name

    def list_items(self, bucket):
        keys = self.store.list(bucket)
        if not keys:
            return text(200, EMPTY_LISTING)
        return text(200, "\n".join(keys))

    def create_item(self, bucket, key, body):
        self.store.put(bucket, key, body)
        return text(201, f"created: {key}")

    def delete_item(self, bucket, key):
        self.store.delete(bucket, key)
        return text(200, f"deleted: {key}")
