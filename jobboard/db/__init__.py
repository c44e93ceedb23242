"""Database package."""

from jobboard.db.base import Base, Database, get_db
from jobboard.db.tables import Job, JobApplication, Role, User, utcnow

__all__ = [
    "Base",
    "Database",
    "get_db",
    "Role",
    "User",
    "Job",
    "JobApplication",
    "utcnow",
]
