"""
User Pydantic schemas for request/response validation
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BCRYPT_MAX_PASSWORD_BYTES = 72


class UserRegister(BaseModel):
    """Schema for user registration"""
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=6)
    email: Optional[str] = None

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return v


class UserLogin(BaseModel):
    """Schema for user login"""
    username: str
    password: str


class UserResponse(BaseModel):
    """Schema for user response"""
    id: Optional[int] = None
    username: str
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Schema for token response"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
    message: Optional[str] = None


class CredentialsIn(BaseModel):
    """Per-user third-party credentials. Omitted fields are left unchanged; "" clears."""
    openaiApiKey: Optional[str] = None
    adzunaAppId: Optional[str] = None
    adzunaApiKey: Optional[str] = None


class CredentialsOut(BaseModel):
    """Never echoes secrets back; only whether each one is set."""
    hasOpenaiApiKey: bool = False
    hasAdzunaAppId: bool = False
    hasAdzunaApiKey: bool = False


class ConnectionTestOut(BaseModel):
    service: str
    success: bool
    message: str


def user_to_credentials_out(user) -> CredentialsOut:
    return CredentialsOut(
        hasOpenaiApiKey=bool((user.openai_api_key or "").strip()),
        hasAdzunaAppId=bool((user.adzuna_app_id or "").strip()),
        hasAdzunaApiKey=bool((user.adzuna_api_key or "").strip()),
    )
