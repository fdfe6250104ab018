"""Pydantic schemas for registration, login and the current user."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RegisterSchema(BaseModel):
    # presence is checked by the service so missing fields map to a 400
    email: str | None = None
    username: str | None = None
    password: str | None = None


class LoginSchema(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOutSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str


class UserDetailSchema(UserOutSchema):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    created_at: datetime


class AuthResponseSchema(BaseModel):
    token: str
    user: UserOutSchema


class MeResponseSchema(BaseModel):
    user: UserDetailSchema
