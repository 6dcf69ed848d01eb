from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from suscheck.models import CheckStatus
from suscheck.risk_engine.types import CheckResult


@dataclass
class CheckContext:
    external: Any


class BaseRiskCheck:
    name = ''
    requires_network = False
    # Seconds the engine waits for a network check before degrading it.
    timeout = 5.0

    def run(self, url: str, domain: str, context: CheckContext) -> CheckResult:
        raise NotImplementedError

    def output(self, *, status: str, detail: str, weight: int = 0) -> CheckResult:
        if status == CheckStatus.PASS:
            weight = 0
        return CheckResult(
            name=self.name,
            status=str(status),
            detail=detail,
            weight=max(0, int(weight)),
        )

    def passed(self, detail: str) -> CheckResult:
        return self.output(status=CheckStatus.PASS, detail=detail)

    def warn(self, detail: str, weight: int) -> CheckResult:
        return self.output(status=CheckStatus.WARN, detail=detail, weight=weight)

    def fail(self, detail: str, weight: int) -> CheckResult:
        return self.output(status=CheckStatus.FAIL, detail=detail, weight=weight)
