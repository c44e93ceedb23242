"""
Domain services.

- users: signup, login, lookups
- jobs: postings and applications
- resumes: resume upload, lookup, deletion
"""

from jobboard.services.jobs import JobBoard
from jobboard.services.resumes import ResumeStore
from jobboard.services.users import UserDirectory

__all__ = ["UserDirectory", "JobBoard", "ResumeStore"]
