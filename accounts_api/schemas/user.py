from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator, model_validator


Role = Literal["user", "admin"]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=255)]


def normalize_email(value: str) -> str:
    return value.strip().lower()


class UserOut(BaseModel):
    """Public projection of a user row. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: Role
    created_at: datetime
    updated_at: Optional[datetime] = None


class UserUpdateRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[Name] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)
    role: Optional[Role] = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: Optional[str]) -> Optional[str]:
        return normalize_email(value) if value is not None else value

    @model_validator(mode="after")
    def _check_fields(self) -> "UserUpdateRequest":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> Dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class UpdateUserRoleRequest(BaseModel):
    role: Role


class UserResponse(BaseModel):
    success: bool = True
    message: str
    user: UserOut


class UserListResponse(BaseModel):
    success: bool = True
    message: str
    users: List[UserOut]
    count: int
