# bookkeeping/services/errors.py
"""Error kinds raised by the service layer.

Each carries the HTTP status the API maps it to; the routers never build
HTTPExceptions for these themselves.
"""
from sqlalchemy.exc import IntegrityError


class ServiceError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(ServiceError):
    status_code = 404
    default_message = "Not found"


class DuplicateEntry(ServiceError):
    status_code = 422
    default_message = "Entry already exists"


class DuplicateEmail(DuplicateEntry):
    default_message = "Email is already in use"


class InvalidReference(ServiceError):
    status_code = 422
    default_message = "Referenced row does not exist"


class DependentRowsExist(ServiceError):
    status_code = 409
    default_message = "Row still has dependent rows"


class Unauthorized(ServiceError):
    status_code = 401
    default_message = "Invalid credentials"


class HashingError(ServiceError):
    default_message = "Error hashing password"


class CredentialValidationError(ServiceError):
    default_message = "Error validating credentials"


class StorageFault(ServiceError):
    default_message = "Storage error"


# driver-level codes: sqlite has none, so its message text is checked instead
_UNIQUE_PGCODES = {"23505"}
_UNIQUE_MYSQL_ERRNOS = {1062}
_FK_PGCODES = {"23503"}
_FK_MYSQL_ERRNOS = {1451, 1452}


def _driver_code(exc: IntegrityError):
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code:
        return code
    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def is_unique_violation(exc: Exception) -> bool:
    if not isinstance(exc, IntegrityError):
        return False
    code = _driver_code(exc)
    if code in _UNIQUE_PGCODES or code in _UNIQUE_MYSQL_ERRNOS:
        return True
    return "UNIQUE constraint failed" in str(exc.orig)


def is_foreign_key_violation(exc: Exception) -> bool:
    if not isinstance(exc, IntegrityError):
        return False
    code = _driver_code(exc)
    if code in _FK_PGCODES or code in _FK_MYSQL_ERRNOS:
        return True
    return "FOREIGN KEY constraint failed" in str(exc.orig)
