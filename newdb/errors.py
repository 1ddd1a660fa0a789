"""Result values and the error taxonomy returned by :mod:`newdb.session`.

Session operations never raise on a driver failure. They hand back a
:class:`Result` and the caller decides, from ``error.fatal``, whether the run
goes on or stops.
"""

from typing import Any, NamedTuple, Optional


class SessionError(Exception):
    """A driver failure, wrapped with the step it happened in."""

    fatal = False

    def __init__(self, stage: str, cause: BaseException):
        self.stage = stage
        self.cause = cause
        self.__cause__ = cause
        super().__init__(f"{stage}: {cause}")


class OpenError(SessionError):
    pass


class ConnectivityError(SessionError):
    pass


class SchemaError(SessionError):
    pass


class ScanError(SessionError):
    fatal = True


class TransactionError(SessionError):
    fatal = True


class Result(NamedTuple):
    value: Any = None
    error: Optional[SessionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None
