"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from jobboard.api.app import create_app
from jobboard.api.limiter import limiter
from jobboard.config import Settings
from jobboard.db import Database, Role, User
from jobboard.identity import Identity
from jobboard.services import JobBoard, ResumeStore, UserDirectory
from jobboard.storage import ResumeBucket, StorageConflictError

TEST_SECRET = "test-secret-key-with-enough-bytes-for-hs256"


class FakeBucket(ResumeBucket):
    """In-memory resume bucket. Set `upload_error`, `url_error` or `remove_error` to make calls fail."""

    def __init__(self, bucket: str = "resumes"):
        self.client = None
        self.bucket = bucket
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.removed: list[str] = []
        self.upload_error: Exception | None = None
        self.url_error: Exception | None = None
        self.remove_error: Exception | None = None

    def upload(self, path: str, content: bytes, content_type: str) -> None:
        if self.upload_error is not None:
            raise self.upload_error
        if path in self.objects:
            raise StorageConflictError(f"Object already exists: {path}")
        self.objects[path] = (content, content_type)

    def public_url(self, path: str) -> str:
        if self.url_error is not None:
            raise self.url_error
        return f"https://demo.supabase.co/storage/v1/object/public/{self.bucket}/{path}"

    def remove(self, path: str) -> None:
        if self.remove_error is not None:
            raise self.remove_error
        self.removed.append(path)
        self.objects.pop(path, None)


@pytest.fixture(autouse=True)
def disable_rate_limit():
    """Keep the shared limiter from throttling repeated test requests."""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="sqlite://",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=4,
        max_resume_bytes=1024,
        jobs_max_limit=100,
        log_level="WARNING",
    )


@pytest.fixture
def database() -> Database:
    """In-memory SQLite database shared across threads."""
    db = Database(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def identity() -> Identity:
    return Identity(TEST_SECRET, rounds=4)


@pytest.fixture
def bucket() -> FakeBucket:
    return FakeBucket()


@pytest.fixture
def users(db_session, identity) -> UserDirectory:
    return UserDirectory(db_session, identity)


@pytest.fixture
def board(db_session, users) -> JobBoard:
    return JobBoard(db_session, users, max_limit=100)


@pytest.fixture
def store(db_session, bucket, users) -> ResumeStore:
    return ResumeStore(db_session, bucket, users)


@pytest.fixture
def make_user(users):
    """Register a user and return it."""

    def _make_user(email: str = "jo@x.com", role: Role = Role.APPLICANT, name: str = "Jo") -> User:
        user, _ = users.register(name, email, "pw123", role.value, "Engineer", "NY")
        return user

    return _make_user


@pytest.fixture
def client(test_settings, database, identity, bucket) -> TestClient:
    app = create_app(test_settings, database=database, identity=identity, bucket=bucket)
    return TestClient(app)
