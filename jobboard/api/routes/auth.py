"""Signup and login endpoints."""

from fastapi import APIRouter, Depends, Request

from jobboard.api.dependencies import get_users
from jobboard.api.limiter import limiter
from jobboard.api.responses import respond
from jobboard.api.schemas import AuthResponse, LoginRequest, SignupRequest, UserResponse
from jobboard.config import settings
from jobboard.db import User
from jobboard.services import UserDirectory

router = APIRouter()


def user_response(user: User) -> UserResponse:
    """Public view of a user; the password hash is never included."""
    return UserResponse(
        id=user.id,
        name=user.name,
        email=user.email,
        user_type=user.user_type.value,
        profile_headline=user.profile_headline,
        address=user.address,
    )


@router.post("/signup", status_code=201)
@limiter.limit(settings.auth_rate_limit)
def signup(
    request: Request,
    data: SignupRequest,
    users: UserDirectory = Depends(get_users),
):
    """Register a new user."""
    user, token = users.register(
        name=data.name,
        email=data.email,
        password=data.password,
        user_type=data.user_type,
        profile_headline=data.profile_headline,
        address=data.address,
    )
    return respond(201, "User registered successfully", AuthResponse(user=user_response(user), token=token))


@router.post("/login")
@limiter.limit(settings.auth_rate_limit)
def login(
    request: Request,
    data: LoginRequest,
    users: UserDirectory = Depends(get_users),
):
    """Authenticate a user."""
    user, token = users.authenticate(data.email, data.password)
    return respond(200, "Login successful", AuthResponse(user=user_response(user), token=token))
