from fastapi import APIRouter, Depends, status

from vocab_trainer.schemas.auth import LoginRequest, RegisterRequest, AuthResponse
from vocab_trainer.services.repository import StudyRepository, get_repository
from vocab_trainer.services.user_service import register_user, authenticate
from vocab_trainer.api.v1.endpoints.utils import user_response

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    repository: StudyRepository = Depends(get_repository)
):
    """Login with email and password."""
    user = authenticate(repository, login_data.email, login_data.password)
    return AuthResponse(user=user_response(user), message="Login successful")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    register_data: RegisterRequest,
    repository: StudyRepository = Depends(get_repository)
):
    """Register a new user. A matching invite code grants the admin role."""
    user = register_user(
        repository,
        name=register_data.name,
        email=register_data.email,
        password=register_data.password,
        invite_code=register_data.invite_code or "",
    )
    return AuthResponse(user=user_response(user), message="Registration successful")
