from os import environ
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    aws_region: str
    environment: str
    storage_backend: Literal["local", "s3"]
    data_bucket: str = ""
    uploads_bucket: str = ""
    db_key: str = "db.json"
    s3_endpoint: str | None = None
    uploads_public_url: str | None = None
    data_dir: str
    upload_dir: str
    base_url: str
    cors_origin: str = "*"
    max_photos_per_request: int = Field(default=10, ge=1)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


_cached_config: Config | None = None


def _reset_config() -> None:
    """Reset cached config (tests only)."""
    global _cached_config
    _cached_config = None


def get_config() -> Config:
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    _cached_config = Config(
        aws_region=environ.get("AWS_REGION", "eu-west-3"),
        environment=environ.get("ENVIRONMENT", "local"),
        storage_backend=environ.get("STORAGE_BACKEND", "local"),
        data_bucket=environ.get("DATA_BUCKET", ""),
        uploads_bucket=environ.get("UPLOADS_BUCKET", ""),
        db_key=environ.get("DB_KEY", "db.json"),
        s3_endpoint=environ.get("S3_ENDPOINT"),
        uploads_public_url=environ.get("UPLOADS_PUBLIC_URL"),
        data_dir=environ.get("DATA_DIR", "data"),
        upload_dir=environ.get("UPLOAD_DIR", "uploads"),
        base_url=environ.get("BASE_URL", "http://localhost:3000").rstrip("/"),
        cors_origin=environ.get("CORS_ORIGIN", "*"),
        max_photos_per_request=int(environ.get("MAX_PHOTOS_PER_REQUEST", "10")),
    )
    return _cached_config
