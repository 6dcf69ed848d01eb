from __future__ import annotations

import math
from typing import Iterable

from django.conf import settings

from suscheck.models import CheckStatus, Tier, Verdict
from suscheck.risk_engine.types import CheckResult

SEVERITY_TIERS: dict[str, str] = {
    'Reputation': Tier.CRITICAL,
    'Homograph': Tier.CRITICAL,
    'DNS Resolution': Tier.CRITICAL,
    'Page Content': Tier.CRITICAL,
    'Domain Age': Tier.HIGH,
    'SSL Certificate': Tier.HIGH,
    'Typosquatting': Tier.HIGH,
    'URL Patterns': Tier.HIGH,
    'Redirects': Tier.MEDIUM,
    'URL Shortener': Tier.MEDIUM,
    'Registration Privacy': Tier.MEDIUM,
}

CRITICAL_FAILS_FOR_BOOST = 2
CRITICAL_BOOST = 1.3
HIGH_FAILS_FOR_BOOST = 3
HIGH_BOOST = 1.2

DEFAULT_SAFE_MAX = 25
DEFAULT_CAUTION_MAX = 55


def failed_by_tier(checks: Iterable[CheckResult]) -> dict[str, int]:
    counts = {tier: 0 for tier in Tier}
    for check in checks:
        tier = SEVERITY_TIERS.get(check.name)
        if tier and check.status == CheckStatus.FAIL:
            counts[tier] += 1
    return counts


def compute_score(checks: Iterable[CheckResult]) -> int:
    checks = list(checks)
    score = float(sum(check.weight for check in checks))

    fails = failed_by_tier(checks)
    if fails[Tier.CRITICAL] >= CRITICAL_FAILS_FOR_BOOST:
        score *= CRITICAL_BOOST
    if fails[Tier.HIGH] >= HIGH_FAILS_FOR_BOOST:
        score *= HIGH_BOOST

    # Half-up rounding, so 62.5 scores 63 rather than 62.
    return max(0, int(math.floor(min(100.0, score) + 0.5)))


def verdict_for(score: int) -> str:
    safe_max = int(getattr(settings, 'SCAN_VERDICT_SAFE_MAX', DEFAULT_SAFE_MAX))
    caution_max = int(getattr(settings, 'SCAN_VERDICT_CAUTION_MAX', DEFAULT_CAUTION_MAX))
    if score <= safe_max:
        return Verdict.SAFE.value
    if score <= caution_max:
        return Verdict.CAUTION.value
    return Verdict.DANGER.value


def score_checks(checks: Iterable[CheckResult]) -> tuple[int, str]:
    score = compute_score(checks)
    return score, verdict_for(score)
