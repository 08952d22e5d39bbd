"""Account signup, login and bearer-token resolution."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

import bcrypt
from jose import JWTError, jwt

from fittrack.domain.errors import UnauthorizedError, ValidationError
from fittrack.domain.models import UserRecord
from fittrack.services.users import UserRepository, normalize_email

MIN_PASSWORD_LENGTH = 8
# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72

_logger = logging.getLogger(__name__)


@dataclass
class AuthService:
    """Creates accounts and issues signed access tokens."""

    repository: UserRepository
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    default_timezone: str = "UTC"

    def signup(self, name: str, email: str, password: str) -> UserRecord:
        """Create an account with a hashed password."""
        normalized = normalize_email(email)
        if not name.strip():
            raise ValidationError("Name is required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError("Password is too long")
        if self.repository.get_by_email(normalized) is not None:
            raise ValidationError("User with this email already exists")
        user = self.repository.create_user(
            name=name.strip(),
            email=normalized,
            password_hash=hash_password(password),
            timezone=self.default_timezone,
        )
        _logger.info("Created user %s", user.id)
        return user

    def login(self, email: str, password: str) -> str:
        """Return an access token for valid credentials."""
        user = self.repository.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid email or password")
        return self.create_access_token(user.id)

    def create_access_token(self, user_id: UUID) -> str:
        """Sign a token whose subject is the user id."""
        expire = datetime.now(tz=UTC) + timedelta(
            minutes=self.access_token_expire_minutes
        )
        return jwt.encode(
            {"sub": str(user_id), "exp": expire},
            self.secret_key,
            algorithm=self.algorithm,
        )

    def resolve_token(self, token: str) -> UUID:
        """Return the user id carried by a valid token."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return UUID(str(payload["sub"]))
        except (JWTError, KeyError, ValueError) as exc:
            raise UnauthorizedError("Invalid access token") from exc


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of the password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash; malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
