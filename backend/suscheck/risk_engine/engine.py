from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
import logging
import time

from django.conf import settings

from suscheck.risk_engine.checks import DEFAULT_CHECKS
from suscheck.risk_engine.checks.base import BaseRiskCheck, CheckContext
from suscheck.risk_engine.errors import ProbeCatastrophic
from suscheck.risk_engine.external import ExternalContext
from suscheck.risk_engine.scoring import score_checks
from suscheck.risk_engine.types import ProbeOutcome, ScanReport

logger = logging.getLogger(__name__)

DEGRADED_WEIGHT = 5


def _degraded(check: BaseRiskCheck, detail: str, error: str) -> ProbeOutcome:
    return ProbeOutcome(result=check.warn(detail, DEGRADED_WEIGHT), degraded=True, error=error)


def _run_inline(check: BaseRiskCheck, url: str, domain: str, context: CheckContext) -> ProbeOutcome:
    try:
        return ProbeOutcome(result=check.run(url=url, domain=domain, context=context))
    except Exception as exc:
        failure = ProbeCatastrophic(check.name, exc)
        logger.exception('Check %s failed for %s', check.name, domain)
        return _degraded(check, 'Check failed unexpectedly', failure.message)


@dataclass
class RiskEngine:
    checks: list[type[BaseRiskCheck]] = field(default_factory=lambda: list(DEFAULT_CHECKS))
    external_factory: type = ExternalContext

    def run(self, url: str, domain: str) -> ScanReport:
        context = CheckContext(external=self.external_factory(domain=domain, url=url))
        instances = [check_class() for check_class in self.checks]
        outcomes = self.collect(instances, url, domain, context)

        results = tuple(outcome.result for outcome in outcomes)
        score, verdict = score_checks(results)

        degraded = [outcome.result.name for outcome in outcomes if outcome.degraded]
        logger.info(
            'Scanned %s: score=%s verdict=%s degraded=%s',
            domain,
            score,
            verdict,
            ','.join(degraded) or '-',
        )
        return ScanReport(url=url, score=score, verdict=verdict, checks=results)

    def collect(
        self,
        checks: list[BaseRiskCheck],
        url: str,
        domain: str,
        context: CheckContext,
    ) -> list[ProbeOutcome]:
        """Run every check and return one outcome per check, in check order.

        Network checks run on a thread pool while the pure checks run inline.
        Every future is joined against its own deadline; a check that misses
        it is reported as a degraded warning instead of blocking the scan.
        """
        outcomes: list[ProbeOutcome | None] = [None] * len(checks)
        network = [(index, check) for index, check in enumerate(checks) if check.requires_network]
        grace = float(getattr(settings, 'SCAN_JOIN_GRACE_SECONDS', 1.0))
        max_workers = int(getattr(settings, 'SCAN_MAX_WORKERS', 0)) or max(1, len(network))

        pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='suscheck')
        try:
            started = time.monotonic()
            futures: dict[int, Future] = {
                index: pool.submit(_run_inline, check, url, domain, context)
                for index, check in network
            }

            for index, check in enumerate(checks):
                if not check.requires_network:
                    outcomes[index] = _run_inline(check, url, domain, context)

            for index, check in network:
                remaining = max(0.0, started + check.timeout + grace - time.monotonic())
                try:
                    outcomes[index] = futures[index].result(timeout=remaining)
                except FutureTimeoutError:
                    logger.warning('Check %s timed out for %s', check.name, domain)
                    outcomes[index] = _degraded(check, 'Check timed out', 'timeout')
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        return outcomes
