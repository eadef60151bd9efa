# app/schemas/user.py
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

PASSWORD_MIN_LENGTH = 5
USERNAME_MAX_LENGTH = 150  # users.username is String(150)

# Public fields returned for any user; the password hash has no field here
class UserRead(BaseModel):
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)

class UserRegister(BaseModel):
    username: str = Field(
        ...,
        min_length=1,
        max_length=USERNAME_MAX_LENGTH,
        description="Username for registration",
        examples=["john_doe"],
    )
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LENGTH,
        description="Password for registration (min 5 chars)",
        examples=["strongPassword123"],
    )

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("username should not be empty")
        return value

class UserLogin(BaseModel):
    username: str = Field(..., description="Username for login", examples=["john_doe"])
    password: str = Field(..., description="Password for login", examples=["strongPassword123"])

# Fields accepted on PUT /user/me
class UserUpdate(BaseModel):
    username: Optional[str] = Field(
        None, min_length=1, max_length=USERNAME_MAX_LENGTH, description="New username (optional)"
    )
    current_password: Optional[str] = Field(
        None, description="Current password (required when changing password)"
    )
    password: Optional[str] = Field(
        None, min_length=PASSWORD_MIN_LENGTH, description="New password (optional, min 5 chars)"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("username should not be empty")
        return value

class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
