from typetester.schemas.auth import (
    AuthResponseSchema,
    LoginSchema,
    MeResponseSchema,
    RegisterSchema,
    UserDetailSchema,
    UserOutSchema,
)
from typetester.schemas.result import (
    ResultEnvelopeSchema,
    ResultListSchema,
    ResultOutSchema,
    ResultSubmitSchema,
)
from typetester.schemas.stats import StatsOutSchema

__all__ = [
    "AuthResponseSchema",
    "LoginSchema",
    "MeResponseSchema",
    "RegisterSchema",
    "UserDetailSchema",
    "UserOutSchema",
    "ResultEnvelopeSchema",
    "ResultListSchema",
    "ResultOutSchema",
    "ResultSubmitSchema",
    "StatsOutSchema",
]
