from __future__ import annotations

import logging
import time
from urllib.parse import urljoin, urlsplit

from suscheck.domain_utils import strip_www
from suscheck.risk_engine.checks.base import BaseRiskCheck
from suscheck.risk_engine.errors import ProbeError

logger = logging.getLogger(__name__)

MAX_HOPS = 10
HOP_TIMEOUT = 3.0


def is_benign_hop(current_url: str, next_url: str) -> bool:
    """Scheme upgrades and www toggles on the same host do not count as suspicious."""
    current = urlsplit(current_url)
    nxt = urlsplit(next_url)

    current_host = (current.hostname or '').lower()
    next_host = (nxt.hostname or '').lower()
    if strip_www(current_host) != strip_www(next_host):
        return False

    if (current.path or '/') != (nxt.path or '/') or current.query != nxt.query:
        return False

    current_scheme = current.scheme.lower()
    next_scheme = nxt.scheme.lower()
    scheme_upgrade = current_scheme == 'http' and next_scheme == 'https'
    if current_scheme != next_scheme and not scheme_upgrade:
        return False

    return scheme_upgrade or current_host != next_host


class RedirectChainCheck(BaseRiskCheck):
    name = 'Redirects'
    requires_network = True
    timeout = 8.0

    def run(self, url, domain, context):
        visited = {url}
        current_url = url
        redirects = 0
        suspicious = 0
        started = time.monotonic()

        try:
            while redirects < MAX_HOPS:
                remaining = self.timeout - (time.monotonic() - started)
                if remaining <= 0:
                    return self.warn('Could not check redirects', 5)

                response = context.external.head(current_url, timeout=min(HOP_TIMEOUT, remaining))
                if not 300 <= response.status_code < 400:
                    break

                location = response.headers.get('Location')
                if not location:
                    break

                next_url = urljoin(current_url, location)
                if next_url in visited:
                    return self.fail('Redirect loop detected', 30)

                redirects += 1
                if not is_benign_hop(current_url, next_url):
                    suspicious += 1
                visited.add(next_url)
                current_url = next_url
        except ProbeError as exc:
            logger.debug('Redirect traversal for %s stopped: %s', url, exc)
            return self.warn('Could not check redirects', 5)

        if suspicious >= 5:
            return self.fail(f'{suspicious} redirects (excessive)', 20)
        if suspicious >= 3:
            return self.warn(f'{suspicious} redirects', 10)
        if suspicious >= 1:
            return self.warn(f'{suspicious} redirect(s)', 5)
        if redirects:
            return self.passed(f'{redirects} benign redirect(s)')
        return self.passed('No redirects')
