"""Authentication endpoints for the Middle Ground API."""

from __future__ import annotations

from fastapi import APIRouter, status

from middle_ground.api.v1.dependencies import CurrentUsernameDep, SessionDep
from middle_ground.core.security import create_access_token
from middle_ground.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserOut,
)
from middle_ground.services.user_service import authenticate_user, get_user, register_user

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return a bearer token for it."""
    user = register_user(
        db,
        username=payload.username.strip(),
        first_name=payload.first_name.strip(),
        last_name=payload.last_name.strip(),
        email=payload.email.strip(),
        password=payload.password,
        pol_lean=payload.pol_lean.strip().upper(),
    )
    return AuthResponse(
        message="User registered successfully",
        token=create_access_token(user.username),
        user=UserOut.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    user = authenticate_user(db, payload.username.strip(), payload.password)
    return AuthResponse(
        message="Login successful",
        token=create_access_token(user.username),
        user=UserOut.model_validate(user),
    )


@router.get("/profile", response_model=ProfileResponse)
def profile(username: CurrentUsernameDep, db: SessionDep) -> ProfileResponse:
    """Return the profile of the authenticated user."""
    return ProfileResponse(user=UserOut.model_validate(get_user(db, username)))
