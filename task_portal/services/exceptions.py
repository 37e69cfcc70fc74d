"""Domain errors for the task portal, each mapped to an HTTP status code"""


class TaskPortalError(Exception):
    """Base exception for the task portal"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskPortalError):
    """Missing or malformed request fields"""
    status_code = 400
    default_message = "Invalid request"


class AuthenticationError(TaskPortalError):
    """Bad credentials"""
    status_code = 401
    default_message = "Invalid credentials"


class AuthorizationError(TaskPortalError):
    """Not logged in, or logged in with the wrong role"""
    status_code = 403
    default_message = "Access denied"


class ConflictError(TaskPortalError):
    status_code = 400
    default_message = "Resource already exists"


class UsernameTaken(ConflictError):
    default_message = "Username already exists"


class DuplicateIdentifier(ConflictError):
    default_message = "Could not allocate a unique employee ID"


class NotFoundError(TaskPortalError):
    status_code = 400
    default_message = "Not found"


class UserNotFound(NotFoundError):
    default_message = "Employee not found"


class AssigneeNotFound(NotFoundError):
    default_message = "Assignee employee not found"


class TaskNotFoundOrNotOwned(NotFoundError):
    # Same message whether the task is missing or belongs to someone else
    default_message = "Task not found or not yours"


class StorageError(TaskPortalError):
    status_code = 500
    default_message = "Database error"
