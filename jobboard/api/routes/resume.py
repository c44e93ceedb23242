"""Resume upload, lookup and deletion endpoints."""

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from jobboard.api.dependencies import get_resume_store
from jobboard.api.responses import respond
from jobboard.api.schemas import EmailRequest, ResumeResponse, ResumeUploadResponse
from jobboard.errors import ValidationError
from jobboard.services import ResumeStore
from jobboard.services.resumes import ALLOWED_MIME_TYPES

router = APIRouter()


async def _read_upload(resume: UploadFile, max_bytes: int) -> bytes:
    """Apply the upload filter: MIME allow-list and size cap."""
    if resume.content_type not in ALLOWED_MIME_TYPES:
        raise ValidationError("Only PDF, DOC and DOCX files are allowed")

    content = await resume.read()
    if len(content) > max_bytes:
        raise ValidationError(f"File too large. Maximum size is {max_bytes // (1024 * 1024)} MB.")
    return content


@router.post("/upload")
async def upload_resume(
    request: Request,
    resume: UploadFile | None = File(None),
    email: str | None = Form(None),
    store: ResumeStore = Depends(get_resume_store),
):
    """Upload a resume (PDF/DOC/DOCX) for an applicant."""
    content, file_name, mime_type = None, None, None
    if resume is not None:
        content = await _read_upload(resume, request.app.state.settings.max_resume_bytes)
        file_name, mime_type = resume.filename, resume.content_type

    uploaded = store.upload(email, content, file_name, mime_type)
    return respond(
        200,
        "Resume uploaded successfully",
        ResumeUploadResponse(
            name=uploaded.name,
            email=uploaded.email,
            resume_url=uploaded.resume_url,
            file_name=uploaded.file_name,
            file_size=uploaded.file_size,
            uploaded_at=uploaded.uploaded_at,
        ),
    )


@router.get("/getResume")
def get_resume(email: str | None = None, store: ResumeStore = Depends(get_resume_store)):
    """Get a user's resume URL by email."""
    user = store.get_resume(email)
    return respond(
        200,
        "Resume retrieved successfully",
        ResumeResponse(
            name=user.name,
            email=user.email,
            user_type=user.user_type.value,
            resume_url=user.resume_url,
        ),
    )


@router.delete("/deleteResume")
def delete_resume(data: EmailRequest | None = None, store: ResumeStore = Depends(get_resume_store)):
    """Delete a user's resume by email."""
    store.delete(data.email if data else None)
    return respond(200, "Resume deleted successfully")
