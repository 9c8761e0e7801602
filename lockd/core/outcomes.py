"""
Lockd — Command outcome types.

Every store command returns a CommandOutcome instead of raising or
silently doing nothing, so callers can branch on the failure reason.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OutcomeKind(Enum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    EMPTY_PRECONDITION = "empty_precondition"
    INVALID_RANGE = "invalid_range"
    INVALID_INPUT = "invalid_input"


@dataclass
class CommandOutcome:
    kind: OutcomeKind
    message: str = ""
    payload: Any = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    @classmethod
    def success(cls, payload: Any = None, message: str = "") -> CommandOutcome:
        return cls(OutcomeKind.SUCCESS, message, payload)

    @classmethod
    def not_found(cls, message: str) -> CommandOutcome:
        return cls(OutcomeKind.NOT_FOUND, message)

    @classmethod
    def empty_precondition(cls, message: str) -> CommandOutcome:
        return cls(OutcomeKind.EMPTY_PRECONDITION, message)

    @classmethod
    def invalid_range(cls, message: str) -> CommandOutcome:
        return cls(OutcomeKind.INVALID_RANGE, message)

    @classmethod
    def invalid_input(cls, message: str) -> CommandOutcome:
        return cls(OutcomeKind.INVALID_INPUT, message)
