"""
Password hashing and token signing.

Passwords are hashed with bcrypt; auth tokens are HS256 JWTs carrying the
user id and role.
"""

from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from jobboard.config import Settings
from jobboard.errors import Unauthorized

# bcrypt only reads this many bytes of input
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


class Identity:
    """Hashes passwords and issues signed tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expires_hours: int = 24,
        rounds: int = 10,
    ):
        if not secret:
            raise ValueError("JWT_SECRET not configured")
        self.secret = secret
        self.algorithm = algorithm
        self.expires = timedelta(hours=expires_hours)
        self.rounds = rounds
        # Compared against when the email is unknown so both login failures cost the same
        self._dummy_hash = self.hash_password("not-a-real-password")

    @classmethod
    def from_settings(cls, settings: Settings) -> "Identity":
        return cls(
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_hours=settings.jwt_expires_hours,
            rounds=settings.bcrypt_rounds,
        )

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def check_password(self, password: str, password_hash: str | None) -> bool:
        """Compare a plaintext password with a stored hash.

        A missing hash is still compared against a dummy so timing does not
        reveal whether the account exists.
        """
        candidate = password.encode("utf-8")
        if password_hash is None or len(candidate) > MAX_PASSWORD_BYTES:
            # No stored hash can come from an over-long password
            bcrypt.checkpw(candidate[:MAX_PASSWORD_BYTES], self._dummy_hash.encode("utf-8"))
            return False
        try:
            return bcrypt.checkpw(candidate, password_hash.encode("utf-8"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False

    def issue_token(self, user_id: str, role: str) -> str:
        now = datetime.now(UTC)
        payload = {
            "_id": user_id,
            "userType": role,
            "iat": now,
            "exp": now + self.expires,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> dict:
        """Decode a token, raising Unauthorized if it is invalid or expired."""
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise Unauthorized("Could not validate credentials")
