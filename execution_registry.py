# execution_registry.py
from dataclasses import dataclass
from enum import Enum


class Outcome(Enum):
    SUCCESS = "success"
    FAULT = "fault"


@dataclass(frozen=True)
class ExecutionEntry:
    """One command's outcome inside a cascade.

    The id is handed out by the owning session and equals the log length
    right after the entry is appended.
    """

    id: int
    outcome: Outcome
    message: str

    @property
    def success(self) -> bool:
        return self.outcome is Outcome.SUCCESS

    def to_dict(self):
        return {"id": self.id, "outcome": self.outcome.value, "message": self.message}
