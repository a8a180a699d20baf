"""Outcome vocabulary shared by every component.

Decision actions report a `Transition`; batch jobs end with a `JobStatus`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class Transition:
    """A named outcome telling the orchestrator which path to take next.

    `Transition.OK` and `Transition.NOK` always exist. Actions with more than
    a binary decision declare extra labels with `Transition.of("WAIT")`.
    Transitions compare by name.
    """

    name: str

    OK: ClassVar[Transition]
    NOK: ClassVar[Transition]

    def __post_init__(self) -> None:
        normalised = self.name.strip().upper() if isinstance(self.name, str) else ""
        if not normalised:
            raise ValueError("Transition name must be a non-empty string")
        object.__setattr__(self, "name", normalised)

    @classmethod
    def of(cls, name: str) -> Transition:
        return cls(name)

    @property
    def is_reserved(self) -> bool:
        return self.name in _RESERVED

    def __str__(self) -> str:
        return self.name


Transition.OK = Transition("OK")
Transition.NOK = Transition("NOK")
_RESERVED = frozenset({"OK", "NOK"})

RESERVED_TRANSITIONS: frozenset[Transition] = frozenset({Transition.OK, Transition.NOK})


class JobStatus(str, Enum):
    """Terminal classification of one batch job execution.

    Severity order: SUCCESS < WARNING < ERROR. ABORTED has no severity; once
    present it wins outright.
    """

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    ABORTED = "aborted"

    @property
    def severity(self) -> int | None:
        return _SEVERITY.get(self)

    @classmethod
    def worst(cls, *statuses: JobStatus) -> JobStatus:
        """Combine statuses: ABORTED if any is aborted, else the most severe."""

        if not statuses:
            return cls.SUCCESS
        if cls.ABORTED in statuses:
            return cls.ABORTED
        return max(statuses, key=lambda s: _SEVERITY[s])


_SEVERITY: dict[JobStatus, int] = {
    JobStatus.SUCCESS: 0,
    JobStatus.WARNING: 1,
    JobStatus.ERROR: 2,
}
