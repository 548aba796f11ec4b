"""Settings for docucache."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocuCacheSettings(BaseSettings):
    """Configuration loaded from ``DOCUCACHE_*`` environment variables.

    Example:
        DOCUCACHE_REDIS_URL=redis://cache:6379/0
        DOCUCACHE_BACKGROUND_WRITES=true
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCUCACHE_",
        env_file=".env",
        extra="ignore",
    )

    # Cache backend
    redis_url: str = "redis://127.0.0.1:6379"
    redis_socket_timeout: float = Field(default=5.0, gt=0)
    redis_connect_timeout: float = Field(default=5.0, gt=0)
    key_prefix: str = "docucache"
    hash_keys: bool = False

    # Read-through behaviour
    background_writes: bool = False
    fallback_on_cache_error: bool = True

    # Document store
    aws_bucket_name: str | None = None
    aws_url: str | None = None
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    aws_default_region: str = "us-east-1"
    aws_retry_attempts: int = Field(default=3, ge=1)
    s3_base_path: str = ""
