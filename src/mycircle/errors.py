from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


class CRMError(Exception):
    """Raised by services for every failure a caller is expected to handle."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"CRMError({self.kind.value!r}, {self.message!r})"


def validation_error(message: str) -> CRMError:
    return CRMError(ErrorKind.VALIDATION, message)


def not_found(what: str, ident: int) -> CRMError:
    return CRMError(ErrorKind.NOT_FOUND, f"{what} with id {ident} not found")


def conflict(message: str) -> CRMError:
    return CRMError(ErrorKind.CONFLICT, message)
