"""Database table models."""

import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobboard.db.base import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching what the columns return."""
    return datetime.now(UTC).replace(tzinfo=None)


class Role(str, enum.Enum):
    """Account type. Capabilities default to denied for any role not listed."""

    ADMIN = "Admin"
    APPLICANT = "Applicant"

    @property
    def can_apply(self) -> bool:
        return self is Role.APPLICANT

    @property
    def can_hold_resume(self) -> bool:
        return self is Role.APPLICANT


class User(Base):
    """User account (Admin or Applicant)."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    user_type: Mapped[Role] = mapped_column(
        Enum(Role, native_enum=False, length=20, values_callable=lambda roles: [r.value for r in roles])
    )
    profile_headline: Mapped[str] = mapped_column(String(255))
    address: Mapped[str] = mapped_column(Text)
    resume_url: Mapped[str | None] = mapped_column(Text, default=None)
    resume_path: Mapped[str | None] = mapped_column(Text, default=None)  # object key in the resume bucket
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    applications: Mapped[list["JobApplication"]] = relationship(back_populates="applicant")


class Job(Base):
    """A job posting."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[str] = mapped_column(Text)
    company_name: Mapped[str] = mapped_column(String(255))
    posted_by_email: Mapped[str] = mapped_column(String(255), index=True)  # checked at creation only
    posted_on: Mapped[datetime] = mapped_column(DateTime, default=utcnow, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)

    applications: Mapped[list["JobApplication"]] = relationship(back_populates="job")


class JobApplication(Base):
    """An applicant's application to a job, keyed by applicant email."""

    __tablename__ = "job_applications"
    __table_args__ = (UniqueConstraint("job_id", "applicant_email", name="uq_job_applications_job_applicant"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    job_id: Mapped[str] = mapped_column(ForeignKey("jobs.id"))
    applicant_email: Mapped[str] = mapped_column(ForeignKey("users.email"))
    applied_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    status: Mapped[str] = mapped_column(String(20), default="pending")

    job: Mapped["Job"] = relationship(back_populates="applications")
    applicant: Mapped["User"] = relationship(back_populates="applications")
