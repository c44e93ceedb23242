"""
Resume bucket on Supabase Storage.

Thin wrapper around the storage API so services only see three operations:
upload without overwrite, public URL lookup, and removal.
"""

import logging

from supabase import Client, create_client

from jobboard.config import Settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """The storage service rejected or failed an operation."""


class StorageConflictError(StorageError):
    """An object already exists at the requested path."""


def _is_duplicate(exc: Exception) -> bool:
    details = exc.args[0] if exc.args else None
    if isinstance(details, dict):
        if str(details.get("statusCode")) == "409" or details.get("error") == "Duplicate":
            return True
    text = str(exc).lower()
    return "duplicate" in text or "already exists" in text


class ResumeBucket:
    """Object storage for resume files."""

    def __init__(self, client: Client, bucket: str = "resumes"):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResumeBucket":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be configured")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return cls(client, settings.resume_bucket)

    def _files(self):
        return self.client.storage.from_(self.bucket)

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        """Store an object; never replaces an existing one."""
        try:
            self._files().upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "false"},
            )
        except Exception as e:
            if _is_duplicate(e):
                raise StorageConflictError(f"Object already exists: {path}") from e
            raise StorageError(str(e)) from e

    def public_url(self, path: str) -> str:
        try:
            return self._files().get_public_url(path)
        except Exception as e:
            raise StorageError(str(e)) from e

    def remove(self, path: str) -> None:
        try:
            self._files().remove([path])
        except Exception as e:
            raise StorageError(str(e)) from e

    def path_from_url(self, url: str) -> str | None:
        """Recover an object path from a public URL, or None if the bucket marker is missing."""
        marker = f"{self.bucket}/"
        if marker not in url:
            return None
        path = url.split(marker, 1)[1].split("?", 1)[0]
        return path or None
