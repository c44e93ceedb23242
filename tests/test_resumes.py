"""
Tests for services/resumes.py - keeping the bucket and users table in step.
"""

import re
from datetime import UTC, datetime

import pytest
from sqlalchemy.exc import OperationalError

from jobboard.db import Role, User
from jobboard.errors import Conflict, Forbidden, InternalError, NotFound, ValidationError
from jobboard.services.resumes import build_resume_path, sanitize_email
from jobboard.storage import StorageConflictError, StorageError

PDF = "application/pdf"
CONTENT = b"%PDF-1.4 resume"


def fail_commit(*args, **kwargs):
    raise OperationalError("UPDATE users", {}, Exception("connection lost"))


class TestPaths:
    def test_sanitize_email(self):
        assert sanitize_email("jo.doe@x.co.uk") == "jo_doe_at_x_co_uk"

    def test_path_embeds_email_and_time(self):
        now = datetime(2026, 1, 1, tzinfo=UTC)
        path, name = build_resume_path("jo@x.com", "My CV.PDF", PDF, now)

        millis = int(now.timestamp() * 1000)
        assert name == f"jo_at_x_com_{millis}.pdf"
        assert path == f"jo_at_x_com/{name}"

    def test_extension_from_mime_when_name_has_none(self):
        _, name = build_resume_path("jo@x.com", "resume", "application/msword", datetime.now(UTC))
        assert name.endswith(".doc")


class TestUpload:
    """Test resume upload and its compensating cleanup."""

    def test_upload_stores_one_object_and_sets_url(self, store, bucket, make_user, db_session):
        make_user()
        uploaded = store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)

        assert len(bucket.objects) == 1
        path = next(iter(bucket.objects))
        assert re.fullmatch(r"jo_at_x_com/jo_at_x_com_\d+\.pdf", path)
        assert bucket.objects[path] == (CONTENT, PDF)

        user = db_session.query(User).filter(User.email == "jo@x.com").one()
        assert user.resume_url == bucket.public_url(path)
        assert user.resume_path == path
        assert uploaded.resume_url == user.resume_url
        assert uploaded.file_size == len(CONTENT)
        assert uploaded.name == "Jo"
        assert uploaded.uploaded_at == user.updated_at
        assert uploaded.uploaded_at.tzinfo is None

    def test_admin_forbidden(self, store, bucket, make_user):
        make_user("admin@x.com", Role.ADMIN)
        with pytest.raises(Forbidden, match="Only applicants can upload resumes"):
            store.upload("admin@x.com", CONTENT, "cv.pdf", PDF)
        assert bucket.objects == {}

    def test_unknown_user(self, store, bucket):
        with pytest.raises(NotFound):
            store.upload("ghost@x.com", CONTENT, "cv.pdf", PDF)
        assert bucket.objects == {}

    def test_missing_email(self, store):
        with pytest.raises(ValidationError, match="Email is required"):
            store.upload("", CONTENT, "cv.pdf", PDF)

    def test_missing_file(self, store, make_user):
        make_user()
        with pytest.raises(ValidationError, match="No file uploaded"):
            store.upload("jo@x.com", None, None, None)

    def test_storage_failure_leaves_record_alone(self, store, bucket, make_user, db_session):
        make_user()
        bucket.upload_error = StorageError("bucket unavailable")

        with pytest.raises(InternalError, match="Failed to upload resume to storage") as exc:
            store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)

        assert exc.value.error == "bucket unavailable"
        assert db_session.query(User).one().resume_url is None

    def test_url_failure_removes_uploaded_object(self, store, bucket, make_user, db_session):
        make_user()
        bucket.url_error = StorageError("url lookup failed")

        with pytest.raises(InternalError, match="Failed to upload resume to storage") as exc:
            store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)

        assert bucket.objects == {}
        assert exc.value.warning == "Uploaded file was removed from storage"
        assert db_session.query(User).one().resume_url is None

    def test_storage_duplicate_is_conflict(self, store, bucket, make_user):
        make_user()
        bucket.upload_error = StorageConflictError("exists")
        with pytest.raises(Conflict):
            store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)

    def test_database_failure_removes_uploaded_object(self, store, bucket, make_user, db_session, monkeypatch):
        """Test that a failed record update does not leave an orphaned object."""
        make_user()
        monkeypatch.setattr(db_session, "commit", fail_commit)

        with pytest.raises(InternalError, match="Failed to update resume URL in database") as exc:
            store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)

        assert bucket.objects == {}
        assert len(bucket.removed) == 1
        assert exc.value.warning == "Uploaded file was removed from storage"
        assert "connection lost" in exc.value.error

    def test_failed_cleanup_is_reported_not_hidden(self, store, bucket, make_user, db_session, monkeypatch):
        make_user()
        monkeypatch.setattr(db_session, "commit", fail_commit)
        bucket.remove_error = StorageError("remove denied")

        with pytest.raises(InternalError, match="Failed to update resume URL in database") as exc:
            store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)

        assert "could not be removed" in exc.value.warning
        assert "remove denied" in exc.value.warning
        assert len(bucket.objects) == 1


class TestGetResume:
    def test_get_resume(self, store, make_user):
        make_user()
        uploaded = store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)

        assert store.get_resume("jo@x.com").resume_url == uploaded.resume_url

    def test_no_resume(self, store, make_user):
        make_user()
        with pytest.raises(NotFound, match="No resume uploaded"):
            store.get_resume("jo@x.com")

    def test_unknown_user(self, store):
        with pytest.raises(NotFound, match="User not found"):
            store.get_resume("ghost@x.com")

    def test_missing_email(self, store):
        with pytest.raises(ValidationError):
            store.get_resume(None)


class TestDelete:
    """Test resume deletion."""

    def test_delete_removes_object_and_clears_record(self, store, bucket, make_user, db_session):
        make_user()
        store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)

        store.delete("jo@x.com")

        assert bucket.objects == {}
        user = db_session.query(User).one()
        assert user.resume_url is None
        assert user.resume_path is None
        with pytest.raises(NotFound):
            store.get_resume("jo@x.com")

    def test_storage_failure_still_clears_record(self, store, bucket, make_user, db_session):
        make_user()
        store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)
        bucket.remove_error = StorageError("remove denied")

        store.delete("jo@x.com")

        assert db_session.query(User).one().resume_url is None
        assert len(bucket.objects) == 1

    def test_path_parsed_from_url_when_not_stored(self, store, bucket, make_user, db_session):
        user = make_user()
        bucket.objects["jo_at_x_com/old.pdf"] = (CONTENT, PDF)
        user.resume_url = bucket.public_url("jo_at_x_com/old.pdf") + "?v=1"
        db_session.commit()

        store.delete("jo@x.com")

        assert bucket.removed == ["jo_at_x_com/old.pdf"]

    def test_unparsable_url(self, store, make_user, db_session):
        user = make_user()
        user.resume_url = "https://elsewhere.example.com/file.pdf"
        db_session.commit()

        with pytest.raises(ValidationError, match="Invalid resume URL format"):
            store.delete("jo@x.com")

    def test_admin_forbidden(self, store, make_user):
        make_user("admin@x.com", Role.ADMIN)
        with pytest.raises(Forbidden, match="Only applicants can have resumes"):
            store.delete("admin@x.com")

    def test_nothing_to_delete(self, store, make_user):
        make_user()
        with pytest.raises(NotFound, match="No resume found to delete"):
            store.delete("jo@x.com")

    def test_database_failure(self, store, make_user, db_session, monkeypatch):
        make_user()
        store.upload("jo@x.com", CONTENT, "cv.pdf", PDF)
        monkeypatch.setattr(db_session, "commit", fail_commit)

        with pytest.raises(InternalError, match="Failed to update database"):
            store.delete("jo@x.com")
