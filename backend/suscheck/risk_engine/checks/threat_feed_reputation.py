from concurrent.futures import ThreadPoolExecutor
import logging

from suscheck.risk_engine.checks.base import BaseRiskCheck

logger = logging.getLogger(__name__)


def _safe_lookup(lookup, target):
    try:
        return lookup(target)
    except Exception:
        logger.warning('Threat feed lookup for %s failed', target, exc_info=True)
        return None


class ThreatFeedReputationCheck(BaseRiskCheck):
    name = 'Reputation'
    requires_network = True
    timeout = 5.0

    def run(self, url, domain, context):
        with ThreadPoolExecutor(max_workers=2) as pool:
            urlhaus_future = pool.submit(_safe_lookup, context.external.urlhaus_host, domain)
            phishtank_future = pool.submit(_safe_lookup, context.external.phishtank_url, url)
            urlhaus = urlhaus_future.result()
            phishtank = phishtank_future.result()

        if urlhaus is not None:
            reports = urlhaus.get('urls') or []
            if urlhaus.get('query_status') == 'ok' and len(reports) > 0:
                return self.fail(f'Found in URLhaus malware database ({len(reports)} reports)', 45)

        if phishtank is not None:
            results = phishtank.get('results') or {}
            if results.get('in_database') and results.get('valid'):
                return self.fail('Listed in PhishTank as an active phishing site', 50)

        if urlhaus is None and phishtank is None:
            return self.warn('Could not check reputation databases', 5)

        if urlhaus is None or phishtank is None:
            unavailable = 'URLhaus' if urlhaus is None else 'PhishTank'
            return self.passed(f'Not found in threat databases ({unavailable} unavailable)')

        return self.passed('Not found in malware or phishing databases')
