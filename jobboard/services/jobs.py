"""Job board: postings, applications, and applicant views."""

import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.db import Job, JobApplication, Role, User, utcnow
from jobboard.errors import Conflict, Forbidden, NotFound, ValidationError, store_errors
from jobboard.services.users import UserDirectory, is_valid_email

logger = logging.getLogger(__name__)

UUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)

DEFAULT_LIMIT = 50


def canonical_id(value: str | None, message: str) -> str:
    """Return the lowercased identifier, or raise ValidationError if malformed."""
    if not value or not UUID_RE.fullmatch(value):
        raise ValidationError(message)
    return value.lower()


class JobBoard:
    """Owns job postings and the application workflow."""

    def __init__(self, db: Session, users: UserDirectory, max_limit: int = 100):
        self.db = db
        self.users = users
        self.max_limit = max_limit

    def post_job(
        self,
        title: str | None,
        description: str | None,
        company_name: str | None,
        email: str | None,
    ) -> Job:
        """Create a posting. Any registered user may post."""
        if not all([title, description, company_name, email]):
            raise ValidationError("All fields are required (title, description, companyName, email)")

        if not is_valid_email(email):
            raise ValidationError("Invalid email format")

        if self.users.lookup(email) is None:
            raise NotFound("User with this email does not exist")

        now = utcnow()
        job = Job(
            title=title,
            description=description,
            company_name=company_name,
            posted_by_email=email,
            posted_on=now,
            created_at=now,
            updated_at=now,
        )
        with store_errors("Internal server error while creating job"):
            self.db.add(job)
            self.db.commit()
            self.db.refresh(job)

        logger.info(f"Job {job.id} posted by {email}")
        return job

    def _find_job(self, job_id: str) -> Job | None:
        with store_errors("Internal server error while retrieving job"):
            return self.db.query(Job).filter(Job.id == job_id).first()

    def get_job(self, job_id: str | None) -> tuple[Job, list[tuple[JobApplication, User]]]:
        """Return a job and its applicants, most recent application first."""
        job_id = canonical_id(job_id, "Invalid job ID format")
        job = self._find_job(job_id)
        if job is None:
            raise NotFound("Job not found")

        with store_errors("Internal server error while retrieving job"):
            applicants = (
                self.db.query(JobApplication, User)
                .join(User, User.email == JobApplication.applicant_email)
                .filter(JobApplication.job_id == job.id)
                .order_by(JobApplication.applied_at.desc())
                .all()
            )
        return job, [(application, user) for application, user in applicants]

    def list_jobs(self, limit: int = DEFAULT_LIMIT, offset: int = 0) -> list[Job]:
        """List postings, newest first."""
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        if offset < 0:
            raise ValidationError("offset cannot be negative")
        limit = min(limit, self.max_limit)

        with store_errors("Internal server error while retrieving jobs"):
            return (
                self.db.query(Job)
                .order_by(Job.posted_on.desc())
                .offset(offset)
                .limit(limit)
                .all()
            )

    def jobs_posted_by(self, email: str) -> list[Job]:
        with store_errors("Internal server error while retrieving jobs"):
            return (
                self.db.query(Job)
                .filter(Job.posted_by_email == email)
                .order_by(Job.posted_on.desc())
                .all()
            )

    def has_applied(self, job_id: str, email: str) -> bool:
        with store_errors("Internal server error while applying to job"):
            existing = (
                self.db.query(JobApplication.id)
                .filter(JobApplication.job_id == job_id, JobApplication.applicant_email == email)
                .first()
            )
        return existing is not None

    def apply(self, job_id: str | None, email: str | None) -> JobApplication:
        """Submit an application for an Applicant."""
        if not email:
            raise ValidationError("Email is required")

        job_id = canonical_id(job_id, "Invalid job ID format")
        if self._find_job(job_id) is None:
            raise NotFound("Job not found")

        user = self.users.lookup(email)
        if user is None:
            raise NotFound("User not found")
        if not user.user_type.can_apply:
            raise Forbidden("Only applicants can apply to jobs")

        if self.has_applied(job_id, email):
            raise Conflict("You have already applied to this job")

        application = JobApplication(
            job_id=job_id,
            applicant_email=email,
            applied_at=utcnow(),
            status="pending",
        )
        with store_errors("Internal server error while applying to job"):
            self.db.add(application)
            try:
                self.db.commit()
            except IntegrityError:
                # A concurrent request inserted the same (job, email) pair first
                self.db.rollback()
                raise Conflict("You have already applied to this job")
            self.db.refresh(application)

        logger.info(f"{email} applied to job {job_id}")
        return application

    def list_applicants(self) -> list[User]:
        """All Applicant accounts, newest first."""
        with store_errors("Internal server error while retrieving applicants"):
            return (
                self.db.query(User)
                .filter(User.user_type == Role.APPLICANT)
                .order_by(User.created_at.desc())
                .all()
            )

    def get_applicant(self, applicant_id: str | None) -> User:
        applicant_id = canonical_id(applicant_id, "Invalid applicant ID format")
        with store_errors("Internal server error while retrieving applicant"):
            applicant = (
                self.db.query(User)
                .filter(User.id == applicant_id, User.user_type == Role.APPLICANT)
                .first()
            )
        if applicant is None:
            raise NotFound("Applicant not found")
        return applicant

    def update_job(
        self,
        job_id: str | None,
        title: str | None = None,
        description: str | None = None,
        company_name: str | None = None,
    ) -> Job:
        """Edit a posting's text fields. Not exposed over HTTP."""
        job_id = canonical_id(job_id, "Invalid job ID format")
        job = self._find_job(job_id)
        if job is None:
            raise NotFound("Job not found")

        if title is not None:
            job.title = title
        if description is not None:
            job.description = description
        if company_name is not None:
            job.company_name = company_name
        job.updated_at = utcnow()

        with store_errors("Internal server error while updating job"):
            self.db.commit()
            self.db.refresh(job)
        return job

    def delete_job(self, job_id: str | None) -> None:
        """Remove a posting and its applications. Not exposed over HTTP."""
        job_id = canonical_id(job_id, "Invalid job ID format")
        job = self._find_job(job_id)
        if job is None:
            raise NotFound("Job not found")

        with store_errors("Internal server error while deleting job"):
            self.db.query(JobApplication).filter(JobApplication.job_id == job_id).delete()
            self.db.delete(job)
            self.db.commit()
        logger.info(f"Job {job_id} deleted")
