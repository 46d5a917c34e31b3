from __future__ import annotations
import io
from pathlib import Path
from typing import Protocol
from minio import Minio
from minio.error import S3Error
from scavenger.config import settings
from scavenger.services.media import mime_for_key


class MediaStorage(Protocol):
    def put_bytes(self, key: str, data: bytes, content_type: str) -> None: ...
    def get_bytes(self, key: str) -> tuple[bytes, str]: ...
    def delete(self, key: str) -> None: ...


def _check_key(key: str) -> str:
    parts = key.split("/")
    if not key or key.startswith("/") or any(p in ("", ".", "..") for p in parts):
        raise FileNotFoundError(f"Invalid storage key: {key}")
    return key


class LocalStorage:
    """Files under a directory on disk (default for dev and single-box deploys)."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def put_bytes(self, key: str, data: bytes, content_type: str) -> None:
        path = self.root / _check_key(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def get_bytes(self, key: str) -> tuple[bytes, str]:
        path = self.root / _check_key(key)
        if not path.is_file():
            raise FileNotFoundError(f"Object not found: {key}")
        return path.read_bytes(), mime_for_key(key)

    def delete(self, key: str) -> None:
        (self.root / _check_key(key)).unlink(missing_ok=True)


def _parse_endpoint(ep: str) -> tuple[str, bool]:
    # Return (host:port, secure)
    secure = ep.startswith("https://")
    host = ep.replace("http://", "").replace("https://", "")
    return host, secure


class S3Storage:
    """S3-compatible bucket (MinIO in dev)."""

    def __init__(self, endpoint: str, access_key: str, secret_key: str, bucket: str):
        host, secure = _parse_endpoint(endpoint)
        self.client = Minio(host, access_key=access_key, secret_key=secret_key, secure=secure)
        self.bucket = bucket
        self._bucket_ready = False

    def _ensure_bucket(self) -> None:
        if self._bucket_ready:
            return
        try:
            if not self.client.bucket_exists(self.bucket):
                self.client.make_bucket(self.bucket)
        except S3Error as e:
            # another worker may have created it first
            if e.code not in ("BucketAlreadyOwnedByYou", "BucketAlreadyExists"):
                raise
        self._bucket_ready = True

    def put_bytes(self, key: str, data: bytes, content_type: str) -> None:
        self._ensure_bucket()
        self.client.put_object(
            self.bucket, _check_key(key), io.BytesIO(data), length=len(data), content_type=content_type
        )

    def get_bytes(self, key: str) -> tuple[bytes, str]:
        try:
            response = self.client.get_object(self.bucket, _check_key(key))
        except S3Error as e:
            if e.code == "NoSuchKey":
                raise FileNotFoundError(f"Object not found: {key}")
            raise
        try:
            data = response.read()
            content_type = response.headers.get("Content-Type", "application/octet-stream")
        finally:
            response.close()
            response.release_conn()
        return data, content_type

    def delete(self, key: str) -> None:
        self.client.remove_object(self.bucket, _check_key(key))


_storage: MediaStorage | None = None

def get_storage() -> MediaStorage:
    """FastAPI dependency; the backend is built once from settings."""
    global _storage
    if _storage is None:
        if settings.storage_backend == "s3":
            _storage = S3Storage(
                settings.s3_endpoint, settings.s3_access_key, settings.s3_secret_key, settings.s3_bucket_uploads
            )
        else:
            _storage = LocalStorage(settings.upload_dir)
    return _storage
