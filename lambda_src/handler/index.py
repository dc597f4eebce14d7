import base64
import logging
from functools import lru_cache

import boto3

from router import Request, Router
from settings import Settings
from store import S3Store

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def s3_client():
    # created once per execution environment, reused across invocations
    return boto3.client("s3")


def get_store(settings):
    return S3Store(s3_client(), paginate=settings.paginate_listing)


def parse_event(event):
    """Turn an API Gateway proxy event (payload 2.0 or 1.0) into a Request."""
    http = (event.get("requestContext") or {}).get("http") or {}
    method = http.get("method") or event.get("httpMethod") or ""
    path = event.get("rawPath") or http.get("path") or event.get("path") or "/"
    query = event.get("queryStringParameters") or {}

    raw = event.get("body")
    if raw is None:
        body = b""
    elif event.get("isBase64Encoded"):
        body = base64.b64decode(raw)
    else:
        body = raw.encode("utf-8")

    return Request(method=method, path=path, query=query, body=body)


def to_proxy_response(response):
    return {
        "statusCode": response.status,
        "headers": {"content-type": response.content_type},
        "body": response.body,
        "isBase64Encoded": False,
    }


def lambda_handler(event, context):
    settings = Settings.from_env()
    # module loggers propagate to the root, so the level is set there
    logging.getLogger().setLevel(settings.log_level)

    request = parse_event(event)
    response = Router(settings, get_store(settings)).handle(request)
    logger.info("%s %s -> %d", request.method, request.path, response.status)
    return to_proxy_response(response)
