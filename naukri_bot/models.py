from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class ListingCandidate:
    """One page element that looks like a job listing.

    ``selector`` + ``index`` (or ``element_id`` when the element has one) is the
    fingerprint used to find the element again on the live page.
    """
    text: str
    classes: str
    selector: str
    index: int = 0
    element_id: str = ""
    matched_keywords: tuple = ()

    @property
    def fingerprint(self) -> dict:
        return {"selector": self.selector, "index": self.index, "id": self.element_id}

    def describe(self) -> str:
        if self.element_id:
            return f"#{self.element_id}"
        return f"{self.selector}[{self.index}]"

    @classmethod
    def from_record(cls, record: dict, excerpt_length: int = 100) -> "ListingCandidate":
        return cls(
            text=(record.get("text") or "")[:excerpt_length],
            classes=record.get("classes") or "",
            selector=record.get("selector") or "",
            index=int(record.get("index") or 0),
            element_id=record.get("id") or "",
            matched_keywords=tuple(record.get("matched") or ()),
        )


class OutcomeStatus(Enum):
    APPLIED = "applied"
    APPLY_CONTROL_NOT_FOUND = "apply_control_not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class ApplicationOutcome:
    status: OutcomeStatus
    candidate: Optional[ListingCandidate] = None
    reason: Optional[str] = None

    @classmethod
    def applied(cls, candidate=None):
        return cls(OutcomeStatus.APPLIED, candidate)

    @classmethod
    def apply_control_not_found(cls, candidate=None):
        return cls(OutcomeStatus.APPLY_CONTROL_NOT_FOUND, candidate)

    @classmethod
    def failed(cls, reason: str, candidate=None):
        return cls(OutcomeStatus.FAILED, candidate, reason)


@dataclass
class BatchResult:
    outcomes: List[ApplicationOutcome] = field(default_factory=list)

    def add(self, outcome: ApplicationOutcome):
        self.outcomes.append(outcome)

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    def summary(self) -> dict:
        return {
            "attempted": len(self.outcomes),
            "applied": self.count(OutcomeStatus.APPLIED),
            "apply_control_not_found": self.count(OutcomeStatus.APPLY_CONTROL_NOT_FOUND),
            "failed": self.count(OutcomeStatus.FAILED),
        }

    def __len__(self):
        return len(self.outcomes)

    def __iter__(self):
        return iter(self.outcomes)


class RunStatus(Enum):
    COMPLETED = "completed"
    FATAL = "fatal"


@dataclass
class RunReport:
    """Result of one whole run.

    FATAL means login or search exhausted its retries; ``stage`` names which one
    and ``error`` carries the final exception. Per-listing failures never make a
    run fatal; they live in ``batch`` as FAILED outcomes.
    """
    status: RunStatus
    batch: BatchResult = field(default_factory=BatchResult)
    candidates_found: int = 0
    stage: Optional[str] = None
    error: Optional[BaseException] = None

    @classmethod
    def completed(cls, batch: BatchResult, candidates_found: int):
        return cls(RunStatus.COMPLETED, batch=batch, candidates_found=candidates_found)

    @classmethod
    def fatal(cls, stage: str, error: BaseException):
        return cls(RunStatus.FATAL, stage=stage, error=error)

    @property
    def is_fatal(self) -> bool:
        return self.status is RunStatus.FATAL
