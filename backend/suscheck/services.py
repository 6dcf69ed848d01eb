from __future__ import annotations

from typing import Any

from suscheck.domain_utils import normalize_url
from suscheck.risk_engine.engine import RiskEngine
from suscheck.risk_engine.types import ScanReport
from suscheck.serializers import ScanReportSerializer


def run_scan(raw_url: str, engine: RiskEngine | None = None) -> ScanReport:
    url, domain = normalize_url(raw_url)
    engine = engine or RiskEngine()
    return engine.run(url=url, domain=domain)


def build_scan_response(report: ScanReport) -> dict[str, Any]:
    # Check weights feed the score only and are not part of the payload.
    return dict(ScanReportSerializer(report).data)
