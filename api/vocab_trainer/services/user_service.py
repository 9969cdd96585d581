"""
User service for business logic related to accounts and roles.
"""
import hmac
import logging
from typing import List

from vocab_trainer.core.config import settings
from vocab_trainer.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
)
from vocab_trainer.models.user import User
from vocab_trainer.schemas.records import ROLE_ADMIN, ROLE_STUDENT, UserRecord
from vocab_trainer.services.repository import StudyRepository

logger = logging.getLogger(__name__)


def verify_password(user: UserRecord, password: str) -> bool:
    """Verify a password against the stored hash."""
    return hmac.compare_digest(user.password_hash, User.hash_password(password))


def register_user(
    repository: StudyRepository,
    name: str,
    email: str,
    password: str,
    invite_code: str = "",
) -> UserRecord:
    """
    Create a new account.

    The admin role is granted only when invite_code matches the configured
    admin invite code; everyone else becomes a student.

    Raises:
        ConflictError: If the email is already registered
    """
    email = email.strip().lower()
    if repository.find_user_by_email(email):
        raise ConflictError("Email already exists")

    role = ROLE_ADMIN if invite_code and invite_code == settings.admin_invite_code else ROLE_STUDENT
    user = repository.add_user(
        name=name.strip(),
        email=email,
        password_hash=User.hash_password(password),
        role=role,
    )
    repository.commit()

    logger.info(f"Registered user {user.id} ({role})")
    return user


def authenticate(repository: StudyRepository, email: str, password: str) -> UserRecord:
    """Return the user for valid credentials."""
    user = repository.find_user_by_email(email)
    if not user or not verify_password(user, password):
        raise AuthenticationError("Invalid email or password")
    return user


def get_user_or_404(repository: StudyRepository, user_id: str, for_update: bool = False) -> UserRecord:
    user = repository.get_user(user_id, for_update=for_update)
    if not user:
        raise NotFoundError(f"User with id {user_id} not found")
    return user


def require_admin(repository: StudyRepository, user_id: str) -> UserRecord:
    """Return the acting user if they are an admin."""
    user = get_user_or_404(repository, user_id)
    if not user.is_admin:
        raise AuthorizationError("Admin role required")
    return user


def list_users(repository: StudyRepository) -> List[UserRecord]:
    return sorted(repository.load_users(), key=lambda u: u.created_at)
