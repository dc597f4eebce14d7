import logging
import os
from dataclasses import dataclass

TRUTHY = {"1", "true", "yes", "on"}
DEFAULT_LOG_LEVEL = "INFO"


def resolve_log_level(value) -> str:
    level = (value or DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logging.getLogger(__name__).warning(
            "Unknown LOG_LEVEL %r, using %s", value, DEFAULT_LOG_LEVEL
        )
        return DEFAULT_LOG_LEVEL
    return level


@dataclass(frozen=True)
class Settings:
    bucket_name: str | None
    log_level: str = DEFAULT_LOG_LEVEL
    paginate_listing: bool = True

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        bucket = (env.get("BUCKET_NAME") or "").strip() or None
        return cls(
            bucket_name=bucket,
            log_level=resolve_log_level(env.get("LOG_LEVEL")),
            paginate_listing=env.get("PAGINATE_LISTING", "true").strip().lower() in TRUTHY,
        )
