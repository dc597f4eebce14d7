import base64

import pytest

import index
from errors import ConfigurationError, StoreError
from store import InMemoryStore


@pytest.fixture
def memory_store(monkeypatch, bucket_name):
    mem = InMemoryStore()
    monkeypatch.setenv("BUCKET_NAME", bucket_name)
    monkeypatch.setattr(index, "get_store", lambda settings: mem)
    return mem


def http_v2_event(method, path, query=None, body=None, b64=False):
    return {
        "version": "2.0",
        "rawPath": path,
        "queryStringParameters": query,
        "requestContext": {"http": {"method": method, "path": path}},
        "body": body,
        "isBase64Encoded": b64,
    }


def rest_v1_event(method, path, query=None, body=None):
    return {
        "httpMethod": method,
        "path": path,
        "queryStringParameters": query,
        "body": body,
        "isBase64Encoded": False,
    }


def test_health_response_shape(memory_store):
    resp = index.lambda_handler(http_v2_event("GET", "/health"), None)
    assert resp == {
        "statusCode": 200,
        "headers": {"content-type": "text/plain"},
        "body": "ok",
        "isBase64Encoded": False,
    }


def test_health_without_bucket_env(monkeypatch):
    monkeypatch.delenv("BUCKET_NAME", raising=False)
    monkeypatch.setattr(index, "get_store", lambda settings: InMemoryStore())
    assert index.lambda_handler(http_v2_event("GET", "/health"), None)["statusCode"] == 200


def test_items_without_bucket_env_fails_invocation(monkeypatch):
    monkeypatch.delenv("BUCKET_NAME", raising=False)
    monkeypatch.setattr(index, "get_store", lambda settings: InMemoryStore())
    with pytest.raises(ConfigurationError):
        index.lambda_handler(http_v2_event("GET", "/items"), None)


def test_create_list_delete_over_v2_events(memory_store, bucket_name):
    resp = index.lambda_handler(http_v2_event("POST", "/items", {"key": "foo"}, "bar"), None)
    assert (resp["statusCode"], resp["body"]) == (201, "created: foo")
    assert memory_store.buckets[bucket_name]["foo"] == b"bar"

    resp = index.lambda_handler(http_v2_event("GET", "/items"), None)
    assert (resp["statusCode"], resp["body"]) == (200, "foo")

    resp = index.lambda_handler(http_v2_event("DELETE", "/items", {"key": "foo"}), None)
    assert (resp["statusCode"], resp["body"]) == (200, "deleted: foo")

    resp = index.lambda_handler(http_v2_event("GET", "/items"), None)
    assert resp["body"] == "no items"


def test_base64_body_is_decoded(memory_store, bucket_name):
    payload = bytes(range(256))
    event = http_v2_event(
        "POST", "/items", {"key": "blob"}, base64.b64encode(payload).decode(), b64=True
    )
    assert index.lambda_handler(event, None)["statusCode"] == 201
    assert memory_store.buckets[bucket_name]["blob"] == payload


def test_missing_body_stores_empty_object(memory_store, bucket_name):
    index.lambda_handler(http_v2_event("POST", "/items", {"key": "empty"}), None)
    assert memory_store.buckets[bucket_name]["empty"] == b""


def test_v1_events_are_routed(memory_store):
    resp = index.lambda_handler(rest_v1_event("POST", "/items", {"key": "k"}, "v"), None)
    assert resp["statusCode"] == 201
    assert index.lambda_handler(rest_v1_event("PATCH", "/items"), None)["statusCode"] == 405
    assert index.lambda_handler(rest_v1_event("GET", "/nope"), None)["statusCode"] == 404


def test_missing_key_is_bad_request(memory_store):
    resp = index.lambda_handler(http_v2_event("DELETE", "/items"), None)
    assert (resp["statusCode"], resp["body"]) == (400, "missing ?key=... for DELETE /items")


def test_store_error_fails_invocation(monkeypatch, bucket_name):
    class BrokenStore(InMemoryStore):
        def put(self, bucket, key, body):
            raise StoreError("put", bucket, key)

    monkeypatch.setenv("BUCKET_NAME", bucket_name)
    monkeypatch.setattr(index, "get_store", lambda settings: BrokenStore())
    with pytest.raises(StoreError):
        index.lambda_handler(http_v2_event("POST", "/items", {"key": "k"}, "v"), None)


def test_get_store_uses_pagination_setting(monkeypatch):
    from settings import Settings

    monkeypatch.setattr(index, "s3_client", lambda: object())
    store = index.get_store(Settings(bucket_name="b", paginate_listing=False))
    assert store.paginate is False


def test_health_with_unknown_log_level(memory_store, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "VERBOSE")
    resp = index.lambda_handler(http_v2_event("GET", "/health"), None)
    assert (resp["statusCode"], resp["body"]) == (200, "ok")
