from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CheckResult:
    name: str
    status: str
    detail: str
    weight: int = 0


@dataclass(frozen=True)
class ProbeOutcome:
    result: CheckResult
    degraded: bool = False
    error: str | None = None


@dataclass(frozen=True)
class ScanReport:
    url: str
    score: int
    verdict: str
    checks: tuple[CheckResult, ...]


@dataclass(frozen=True)
class RegistrationRecord:
    domain: str
    registered_at: datetime | None = None
    organizations: tuple[str, ...] = ()
    remarks: tuple[str, ...] = ()
    contacts: tuple[str, ...] = ()
    source: str = 'rdap'
