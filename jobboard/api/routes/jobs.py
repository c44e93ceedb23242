"""Job and applicant endpoints."""

from fastapi import APIRouter, Depends

from jobboard.api.dependencies import get_job_board
from jobboard.api.responses import respond
from jobboard.api.schemas import (
    ApplicantDetailResponse,
    ApplicantResponse,
    ApplicationResponse,
    EmailRequest,
    JobApplicantResponse,
    JobCreate,
    JobDetailResponse,
    JobResponse,
)
from jobboard.db import Job
from jobboard.services import JobBoard
from jobboard.services.jobs import DEFAULT_LIMIT

router = APIRouter()


def job_response(job: Job) -> JobResponse:
    return JobResponse(
        id=job.id,
        title=job.title,
        description=job.description,
        company_name=job.company_name,
        posted_on=job.posted_on,
        posted_by=job.posted_by_email,
    )


@router.post("/job", status_code=201)
def create_job(data: JobCreate, board: JobBoard = Depends(get_job_board)):
    """Create a new job posting."""
    job = board.post_job(data.title, data.description, data.company_name, data.email)
    return respond(201, "Job created successfully", job_response(job))


@router.get("/job/{job_id}")
def get_job(job_id: str, board: JobBoard = Depends(get_job_board)):
    """View a job with its applicants."""
    job, applicants = board.get_job(job_id)
    detail = JobDetailResponse(
        **job_response(job).model_dump(),
        applicants=[
            JobApplicantResponse(
                id=user.id,
                name=user.name,
                email=user.email,
                profile_headline=user.profile_headline,
                address=user.address,
                resume_url=user.resume_url,
                applied_at=application.applied_at,
                status=application.status,
            )
            for application, user in applicants
        ],
    )
    return respond(200, "Job details retrieved successfully", detail)


@router.get("/jobs")
def list_jobs(limit: int = DEFAULT_LIMIT, offset: int = 0, board: JobBoard = Depends(get_job_board)):
    """List jobs, newest first."""
    jobs = [job_response(job) for job in board.list_jobs(limit, offset)]
    return respond(200, "Jobs retrieved successfully", jobs, count=len(jobs))


@router.post("/job/{job_id}/apply", status_code=201)
def apply_to_job(
    job_id: str,
    data: EmailRequest | None = None,
    board: JobBoard = Depends(get_job_board),
):
    """Apply to a job as an applicant."""
    application = board.apply(job_id, data.email if data else None)
    return respond(
        201,
        "Application submitted successfully",
        ApplicationResponse(
            application_id=application.id,
            job_id=application.job_id,
            applicant_email=application.applicant_email,
            applied_at=application.applied_at,
            status=application.status,
        ),
    )


@router.get("/applicants")
def list_applicants(board: JobBoard = Depends(get_job_board)):
    """List all applicants, newest first."""
    applicants = [
        ApplicantResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            profile_headline=user.profile_headline,
            address=user.address,
            resume_url=user.resume_url,
            created_at=user.created_at,
        )
        for user in board.list_applicants()
    ]
    return respond(200, "Applicants retrieved successfully", applicants, count=len(applicants))


@router.get("/applicant/{applicant_id}")
def get_applicant(applicant_id: str, board: JobBoard = Depends(get_job_board)):
    """Get one applicant's details."""
    user = board.get_applicant(applicant_id)
    return respond(
        200,
        "Applicant details retrieved successfully",
        ApplicantDetailResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            profile_headline=user.profile_headline,
            address=user.address,
            resume_url=user.resume_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        ),
    )
