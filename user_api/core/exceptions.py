"""
Domain errors raised by the user service.

Route handlers let these propagate; the exception handlers registered in
main.py turn them into HTTP responses. Database errors are not
part of this hierarchy and surface as server errors.
"""

from typing import Optional

EMAIL_CONFLICT_MESSAGE = "A user with this email already exists."
USERNAME_CONFLICT_MESSAGE = "A user with this username already exists."


class UserApiError(Exception):
    """Base class for errors the API maps to a client response"""


class UserValidationError(UserApiError):
    """The payload failed structural validation"""

    def __init__(self, errors: list):
        self.errors = errors
        super().__init__(f"{len(errors)} validation error(s)")


class UserConflictError(UserApiError):
    """The write would break email or username uniqueness"""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UserNotFoundError(UserApiError):
    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class UserIdMismatchError(UserApiError):
    """The record id in the body does not match the target id"""

    def __init__(self, target_id: int, body_id: Optional[int]):
        self.target_id = target_id
        self.body_id = body_id
        super().__init__(f"Body id {body_id} does not match target id {target_id}")
