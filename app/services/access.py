"""Tagged outcome of an access-validated operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class AccessStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class AccessResult(Generic[T]):
    status: AccessStatus
    value: Optional[T] = None

    @property
    def ok(self) -> bool:
        return self.status is AccessStatus.OK

    @classmethod
    def success(cls, value: Optional[T] = None) -> "AccessResult[T]":
        return cls(AccessStatus.OK, value)

    @classmethod
    def not_found(cls) -> "AccessResult[T]":
        return cls(AccessStatus.NOT_FOUND)

    @classmethod
    def forbidden(cls) -> "AccessResult[T]":
        return cls(AccessStatus.FORBIDDEN)
