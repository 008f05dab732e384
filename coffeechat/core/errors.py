# coffeechat/core/errors.py
"""
Error taxonomy shared by the services and the HTTP layer.

Services raise these; ``coffeechat.main`` renders them as
``{"detail": ...}`` with the matching status code.
"""


class AppError(Exception):
    status_code = 500
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class InvalidInput(AppError):
    status_code = 400
    default_detail = "Invalid input"


class Unauthorized(AppError):
    status_code = 401
    default_detail = "Authentication required"


class Forbidden(AppError):
    status_code = 403
    default_detail = "Forbidden"


class NotFound(AppError):
    status_code = 404
    default_detail = "Not found"


class Conflict(AppError):
    status_code = 409
    default_detail = "Conflict"


class Internal(AppError):
    status_code = 500
