"""FastAPI dependencies wiring services to the per-request session."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from jobboard.db import get_db
from jobboard.identity import Identity
from jobboard.services import JobBoard, ResumeStore, UserDirectory


def get_identity(request: Request) -> Identity:
    return request.app.state.identity


def get_users(
    db: Session = Depends(get_db),
    identity: Identity = Depends(get_identity),
) -> UserDirectory:
    return UserDirectory(db, identity)


def get_job_board(
    request: Request,
    db: Session = Depends(get_db),
    users: UserDirectory = Depends(get_users),
) -> JobBoard:
    return JobBoard(db, users, max_limit=request.app.state.settings.jobs_max_limit)


def get_resume_store(
    request: Request,
    db: Session = Depends(get_db),
    users: UserDirectory = Depends(get_users),
) -> ResumeStore:
    return ResumeStore(db, request.app.state.bucket, users)
