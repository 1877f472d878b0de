from pydantic import BaseModel, EmailStr, Field, field_validator

from accounts_api.schemas.user import Name, Role, normalize_email


class SignUpRequest(BaseModel):
    name: Name
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    role: Role = "user"

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return normalize_email(value)


class MessageResponse(BaseModel):
    success: bool = True
    message: str
