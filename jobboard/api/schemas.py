"""API request/response schemas."""

from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model exposed to clients with camelCase field names."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# Auth schemas
# Fields are optional so missing values reach the service and get its message.
class SignupRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    user_type: str | None = None
    profile_headline: str | None = None
    address: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    user_type: str
    profile_headline: str
    address: str


class AuthResponse(CamelModel):
    user: UserResponse
    token: str


# Job schemas
class JobCreate(CamelModel):
    title: str | None = None
    description: str | None = None
    company_name: str | None = None
    email: str | None = None


class JobResponse(CamelModel):
    id: str
    title: str
    description: str
    company_name: str
    posted_on: datetime
    posted_by: str


class JobApplicantResponse(CamelModel):
    id: str
    name: str
    email: str
    profile_headline: str
    address: str
    resume_url: str | None
    applied_at: datetime
    status: str


class JobDetailResponse(JobResponse):
    applicants: list[JobApplicantResponse]


class EmailRequest(CamelModel):
    email: str | None = None


class ApplicationResponse(CamelModel):
    application_id: str
    job_id: str
    applicant_email: str
    applied_at: datetime
    status: str


# Applicant schemas
class ApplicantResponse(CamelModel):
    id: str
    name: str
    email: str
    profile_headline: str
    address: str
    resume_url: str | None
    created_at: datetime


class ApplicantDetailResponse(ApplicantResponse):
    updated_at: datetime


# Resume schemas (snake_case on the wire)
class ResumeUploadResponse(BaseModel):
    name: str
    email: str
    resume_url: str
    file_name: str
    file_size: int
    uploaded_at: datetime


class ResumeResponse(BaseModel):
    name: str
    email: str
    user_type: str
    resume_url: str
