# prodaccess/models/results.py

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from prodaccess.services.errors import ErrorKind, MaterializeError


class Outcome(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ActivationResult:
    """ What one activator did for its consumer """
    consumer: str
    outcome: Outcome
    kind: Optional[ErrorKind] = None
    message: str = ""
    warnings: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.outcome is not Outcome.FAILED

    @classmethod
    def success(cls, consumer: str, message: str = "", warnings: Sequence[str] = ()) -> "ActivationResult":
        return cls(consumer, Outcome.OK, message=message, warnings=tuple(warnings))

    @classmethod
    def skipped(cls, consumer: str, message: str) -> "ActivationResult":
        return cls(consumer, Outcome.SKIPPED, message=message)

    @classmethod
    def failure(
            cls,
            consumer: str,
            exc: MaterializeError,
            warnings: Sequence[str] = (),
        ) -> "ActivationResult":
        return cls(consumer, Outcome.FAILED, kind=exc.kind, message=str(exc), warnings=tuple(warnings))

    def describe(self) -> str:
        """ One-line summary naming the consumer and the cause """
        if self.outcome is Outcome.FAILED:
            return f"{self.consumer}: {self.kind.value}: {self.message}"
        if self.message:
            return f"{self.consumer}: {self.message}"
        return f"{self.consumer}: {self.outcome.value}"
