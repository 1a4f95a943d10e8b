"""Exceptions at the edge of the railway

Expected failures travel as ``Failure`` values. These exceptions cover the
two ways of leaving that track: a programming defect (reading the wrong
side of a result) and a deliberate conversion of an Error into a raise.
"""
from __future__ import annotations

from typing import NoReturn

from .types import Error


class ResultAccessError(ValueError):
    """Raised when a result is read on the wrong branch."""


class ErrorException(Exception):
    """Exception wrapper for Error.

    Use this when you need to raise an Error in code that
    doesn't use the Result type (e.g., framework dependencies).
    """

    def __init__(self, error: Error):
        self.error = error
        super().__init__(str(error))


def raise_error(error: Error) -> NoReturn:
    """Raise Error as exception.

    Usage:
        if user is None:
            raise_error(NotFoundError(f"User {user_id} not found"))
    """
    raise ErrorException(error)
