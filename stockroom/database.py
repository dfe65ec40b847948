"""Helpers for reading error codes reported by a MySQL server."""

from __future__ import annotations

ER_DUP_ENTRY = 1062
ER_TRUNCATED_WRONG_VALUE = 1292
ER_DATA_TOO_LONG = 1406
ER_NO_REFERENCED_ROW_2 = 1452


class MySQLError(Exception):
    """An error reported by a MySQL server, carrying its numeric code."""

    def __init__(self, number: int = 0, message: str = "") -> None:
        super().__init__(number, message)
        self.number = number
        self.message = message

    def __str__(self) -> str:
        return f"Error {self.number}: {self.message}"


def _is_code(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def mysql_error_number(error: BaseException) -> int | None:
    """Return the MySQL error number carried by ``error``, or None if it has none.

    Understands :class:`MySQLError` as well as driver exceptions that keep the
    code in an ``errno`` attribute or as their first argument.
    """
    if isinstance(error, MySQLError):
        return error.number
    if isinstance(error, OSError):
        return None
    errno = getattr(error, "errno", None)
    if _is_code(errno):
        return errno
    args = getattr(error, "args", ())
    if args and _is_code(args[0]):
        return args[0]
    return None