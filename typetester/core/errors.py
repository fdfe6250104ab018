"""Service-level errors. Each carries the HTTP status it maps to."""


class ServiceError(Exception):
    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# ---------- 400 ----------

class ValidationError(ServiceError):
    status_code = 400
    message = "Invalid request"


class MissingFieldsError(ValidationError):
    message = "All fields are required"


class InvalidUsernameLengthError(ValidationError):
    message = "Username must be 3-20 characters"


class InvalidUsernameCharsetError(ValidationError):
    message = "Username can only contain lowercase letters, numbers, underscores"


class WeakPasswordError(ValidationError):
    message = "Password must be at least 6 characters"


class PasswordTooLongError(ValidationError):
    message = "Password must be at most 72 bytes"


class MissingResultFieldsError(ValidationError):
    message = "Missing required fields"


# ---------- 409 ----------

class ConflictError(ServiceError):
    status_code = 409
    message = "Conflict"


class EmailConflictError(ConflictError):
    message = "Email already registered"


class UsernameConflictError(ConflictError):
    message = "Username already taken"


# ---------- 401 ----------

class AuthError(ServiceError):
    status_code = 401
    message = "Not authenticated"


class InvalidCredentialsError(AuthError):
    message = "Invalid email or password"


# ---------- 404 / 500 ----------

class NotFoundError(ServiceError):
    status_code = 404
    message = "Not found"


class InternalError(ServiceError):
    pass
