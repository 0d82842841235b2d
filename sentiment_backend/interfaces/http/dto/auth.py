from __future__ import annotations

from pydantic import BaseModel, Field

from sentiment_backend.domain.users.entities import User


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)


class UserDTO(BaseModel):
    id: int
    username: str

    @classmethod
    def from_domain(cls, user: User) -> UserDTO:
        return cls(id=user.id, username=user.username)


class RegisterSuccessDTO(BaseModel):
    message: str = "User registered"
    user: UserDTO


class LoginSuccessDTO(BaseModel):
    token: str
