from typing import Literal
from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: str
    email: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    role: Literal["student", "teacher"]
    user: LoginUser


class MeResponse(BaseModel):
    role: Literal["student", "teacher"]
    profile: LoginUser
