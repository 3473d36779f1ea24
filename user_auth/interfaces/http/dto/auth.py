from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from user_auth.domain.users.entities import User


class SignUpRequestDTO(BaseModel):
    # Emptiness and email syntax are checked by the session service so the
    # caller gets empty_name / invalid_email / empty_password error codes.
    name: str = Field(default="", max_length=128)
    email: str = Field(default="", max_length=254)
    password: str = Field(default="", max_length=128)
    admin: bool = False

    model_config = ConfigDict(extra="ignore")


class SignInRequestDTO(BaseModel):
    email: str = Field(default="", max_length=254)
    password: str = Field(default="", max_length=128)

    model_config = ConfigDict(extra="ignore")


class UserDTO(BaseModel):
    id: str
    name: str
    email: str
    admin: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> UserDTO:
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            admin=user.is_admin,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class SignInResponseDTO(BaseModel):
    user: UserDTO
    token: str


class TokenResponseDTO(BaseModel):
    token: str


class AuthResponseDTO(BaseModel):
    user_id: str
