"""
Resume store.

Keeps a user's resume object in the bucket and the user's resume columns in
step. Uploads are rolled back in storage if the database update fails;
deletes clear the database even when storage removal fails.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobboard.db import User, utcnow
from jobboard.errors import Conflict, Forbidden, InternalError, NotFound, ValidationError
from jobboard.services.users import UserDirectory
from jobboard.storage import ResumeBucket, StorageConflictError, StorageError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
}


@dataclass
class UploadedResume:
    name: str
    email: str
    resume_url: str
    file_name: str
    file_size: int
    uploaded_at: datetime


def sanitize_email(email: str) -> str:
    return email.replace("@", "_at_").replace(".", "_")


def build_resume_path(email: str, file_name: str, mime_type: str, now: datetime) -> tuple[str, str]:
    """Return (object path, stored file name) for an upload at `now`."""
    if "." in file_name:
        extension = file_name.rsplit(".", 1)[1].lower()
    else:
        extension = ALLOWED_MIME_TYPES.get(mime_type, "bin")
    safe_email = sanitize_email(email)
    # Naive values are UTC
    millis = int(now.replace(tzinfo=UTC).timestamp() * 1000)
    stored_name = f"{safe_email}_{millis}.{extension}"
    return f"{safe_email}/{stored_name}", stored_name


class ResumeStore:
    """Couples resume objects in storage with the users table."""

    def __init__(self, db: Session, bucket: ResumeBucket, users: UserDirectory):
        self.db = db
        self.bucket = bucket
        self.users = users

    def _applicant(self, email: str, forbidden_message: str, missing_message: str = "User not found") -> User:
        user = self.users.lookup(email)
        if user is None:
            raise NotFound(missing_message)
        if not user.user_type.can_hold_resume:
            raise Forbidden(forbidden_message)
        return user

    def upload(
        self,
        email: str | None,
        content: bytes | None,
        file_name: str | None,
        mime_type: str | None,
    ) -> UploadedResume:
        """Store a new resume object and point the user's record at it."""
        if not email:
            raise ValidationError("Email is required")
        if content is None or not file_name:
            raise ValidationError("No file uploaded")

        user = self._applicant(email, "Only applicants can upload resumes", "User not found with this email")

        now = utcnow()
        path, stored_name = build_resume_path(email, file_name, mime_type or "", now)

        try:
            self.bucket.upload(path, content, mime_type or "application/octet-stream")
        except StorageConflictError as e:
            raise Conflict("A resume with this name already exists, retry the upload", error=str(e))
        except StorageError as e:
            logger.error(f"Storage upload failed for {path}: {e}")
            raise InternalError("Failed to upload resume to storage", error=str(e))

        try:
            resume_url = self.bucket.public_url(path)
        except StorageError as e:
            logger.error(f"Could not resolve public URL for {path}: {e}")
            raise InternalError(
                "Failed to upload resume to storage",
                error=str(e),
                warning=self._discard_object(path),
            )

        user.resume_url = resume_url
        user.resume_path = path
        user.updated_at = now
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database update failed after storing {path}: {e}")
            raise InternalError(
                "Failed to update resume URL in database",
                error=str(e),
                warning=self._discard_object(path),
            )

        logger.info(f"Stored resume for {email} at {path}")
        return UploadedResume(
            name=user.name,
            email=user.email,
            resume_url=resume_url,
            file_name=stored_name,
            file_size=len(content),
            uploaded_at=now,
        )

    def _discard_object(self, path: str) -> str:
        """Remove an object written by a failed upload and describe the outcome."""
        try:
            self.bucket.remove(path)
        except StorageError as e:
            logger.warning(f"Could not remove orphaned resume {path}: {e}")
            return f"Uploaded file could not be removed from storage: {e}"
        logger.warning(f"Removed orphaned resume {path}")
        return "Uploaded file was removed from storage"

    def get_resume(self, email: str | None) -> User:
        """Return the user whose resume is on file."""
        if not email:
            raise ValidationError("Email is required")

        user = self.users.lookup(email)
        if user is None:
            raise NotFound("User not found")
        if not user.resume_url:
            raise NotFound("No resume uploaded for this user")
        return user

    def delete(self, email: str | None) -> None:
        """Remove the user's resume object and clear the record."""
        if not email:
            raise ValidationError("Email is required")

        user = self._applicant(email, "Only applicants can have resumes")
        if not user.resume_url:
            raise NotFound("No resume found to delete")

        path = user.resume_path or self.bucket.path_from_url(user.resume_url)
        if not path:
            raise ValidationError("Invalid resume URL format")

        try:
            self.bucket.remove(path)
        except StorageError as e:
            # Clearing the record still goes ahead; the object may be left behind
            logger.error(f"Storage deletion failed for {path}: {e}")

        user.resume_url = None
        user.resume_path = None
        user.updated_at = utcnow()
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Database update failed while deleting resume for {email}: {e}")
            raise InternalError("Failed to update database", error=str(e))

        logger.info(f"Deleted resume for {email}")
