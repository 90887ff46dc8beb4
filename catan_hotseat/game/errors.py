from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RuleErrorKind(str, Enum):
    OUT_OF_RANGE = "out_of_range"
    ILLEGAL_STATE = "illegal_state"
    RULE_VIOLATION = "rule_violation"
    INSUFFICIENT_RESOURCES = "insufficient_resources"


class GameRuleError(ValueError):
    """A refused command. The game state it was raised against is untouched."""

    def __init__(self, kind: RuleErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass(frozen=True)
class CommandResult:
    ok: bool
    message: str
    error: RuleErrorKind | None = None

    @classmethod
    def success(cls, message: str) -> "CommandResult":
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, error: GameRuleError) -> "CommandResult":
        return cls(ok=False, message=error.message, error=error.kind)
