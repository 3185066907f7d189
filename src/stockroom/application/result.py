"""OperationResult: what every ArticleService operation returns.

A result is either a ``Success`` carrying a value or a ``Failure`` carrying
a human-readable message. The two are separate types, so a result can
never hold both.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    PERSISTENCE = "persistence"
    INTERNAL = "internal"


class UnwrapError(Exception):
    """Raised when ``unwrap()`` is called on a Failure."""


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    """An expected failure.

    ``retryable`` is set when the same request may succeed if sent again,
    e.g. after a concurrent write was detected.
    """

    message: str
    kind: ErrorKind = ErrorKind.INTERNAL
    retryable: bool = False

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise UnwrapError(f"{self.kind.value}: {self.message}")

    def __str__(self) -> str:
        return self.message


OperationResult = Union[Success[T], Failure]
