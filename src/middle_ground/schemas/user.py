"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from middle_ground.models.enums import Leaning


class RegisterRequest(BaseModel):
    """Schema for account registration.

    Fields default to empty strings so that missing values are reported by
    the service as a single "missing fields" error.
    """

    username: str = Field("", max_length=50)
    first_name: str = Field("", max_length=50)
    last_name: str = Field("", max_length=50)
    email: str = Field("", max_length=100)
    password: str = ""
    pol_lean: str = Field("", description="One of FL, L, SL, M, SR, R, FR")


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str = ""
    password: str = ""


class UserOut(BaseModel):
    """Public profile of a user."""

    username: str
    first_name: str
    last_name: str
    email: str
    pol_lean: Leaning
    account_verified: bool
    date_created: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AuthorOut(BaseModel):
    """Author fields embedded in posts and comments."""

    username: str
    first_name: str
    last_name: str
    pol_lean: Leaning

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Response returned after registration or login."""

    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    user: UserOut


class ProfileResponse(BaseModel):
    success: bool = True
    user: UserOut
