"""User directory: signup, login, and user lookups."""

import logging
import re

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobboard.db import Role, User, utcnow
from jobboard.errors import Conflict, NotFound, Unauthorized, ValidationError, store_errors
from jobboard.identity import MAX_PASSWORD_BYTES, Identity, password_too_long

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.fullmatch(email))


class UserDirectory:
    """Owns user records and identity operations."""

    def __init__(self, db: Session, identity: Identity):
        self.db = db
        self.identity = identity

    def lookup(self, email: str) -> User | None:
        """Find a user by exact email. Absence is not an error."""
        with store_errors("Internal server error while looking up user"):
            return self.db.query(User).filter(User.email == email).first()

    def get(self, user_id: str) -> User | None:
        with store_errors("Internal server error while looking up user"):
            return self.db.query(User).filter(User.id == user_id).first()

    def register(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        user_type: str | None,
        profile_headline: str | None,
        address: str | None,
    ) -> tuple[User, str]:
        """Create an account and return it with a fresh token."""
        if not all([name, email, password, user_type, profile_headline, address]):
            raise ValidationError(
                "All fields are required (name, email, password, userType, profileHeadline, address)"
            )

        try:
            role = Role(user_type)
        except ValueError:
            raise ValidationError('userType must be either "Admin" or "Applicant"')

        if not is_valid_email(email):
            raise ValidationError("Invalid email format")

        if password_too_long(password):
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

        if self.lookup(email) is not None:
            raise Conflict("User with this email already exists")

        user = User(
            name=name,
            email=email,
            password_hash=self.identity.hash_password(password),
            user_type=role,
            profile_headline=profile_headline,
            address=address,
        )

        with store_errors("Internal server error during signup"):
            self.db.add(user)
            try:
                self.db.commit()
            except IntegrityError:
                # Lost a race with a concurrent signup for the same email
                self.db.rollback()
                raise Conflict("User with this email already exists")
            self.db.refresh(user)

        logger.info(f"Registered {role.value} {user.id}")
        return user, self.identity.issue_token(user.id, role.value)

    def authenticate(self, email: str | None, password: str | None) -> tuple[User, str]:
        """Check credentials and return the user with a fresh token."""
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.lookup(email)
        stored_hash = user.password_hash if user else None
        if not self.identity.check_password(password, stored_hash) or user is None:
            raise Unauthorized("Invalid email or password")

        return user, self.identity.issue_token(user.id, user.user_type.value)

    def update_profile(
        self,
        user_id: str,
        name: str | None = None,
        profile_headline: str | None = None,
        address: str | None = None,
    ) -> User:
        """Update editable profile fields; fields left as None are unchanged."""
        changes = {"name": name, "profile_headline": profile_headline, "address": address}
        changes = {field: value for field, value in changes.items() if value is not None}
        if any(not value.strip() for value in changes.values()):
            raise ValidationError("Profile fields cannot be empty")

        user = self.get(user_id)
        if user is None:
            raise NotFound("User not found")

        for field, value in changes.items():
            setattr(user, field, value)
        user.updated_at = utcnow()

        with store_errors("Internal server error while updating user"):
            self.db.commit()
            self.db.refresh(user)
        return user
