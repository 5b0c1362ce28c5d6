"""Application errors and their mapping to HTTP status codes."""
from typing import Literal, Optional

AppErrorType = Literal["conflict", "not_found", "unauthorized", "wrong_schema", "bad_request"]


class AppError(Exception):
    def __init__(self, type: AppErrorType, name: str, message: Optional[str] = None):
        super().__init__(message)
        self.type = type
        self.name = name
        self.message = message


def is_app_error(error: object) -> bool:
    return getattr(error, "type", None) is not None


def error_type_to_status_code(type: str) -> int:
    if type == "conflict":
        return 409
    if type == "not_found":
        return 404
    if type == "unauthorized":
        return 401
    if type == "wrong_schema":
        return 422

    return 400


def bad_request_error(message: Optional[str] = None) -> AppError:
    return AppError("bad_request", "BadRequest", message)


def conflict_error(message: Optional[str] = None) -> AppError:
    return AppError("conflict", "Conflict", message)


def not_found_error(message: Optional[str] = None) -> AppError:
    return AppError("not_found", "NotFound", message)


def unauthorized_error(message: Optional[str] = None) -> AppError:
    return AppError("unauthorized", "Unauthorized", message)


def wrong_schema_error(message: Optional[str] = None) -> AppError:
    return AppError("wrong_schema", "WrongSchema", message)
