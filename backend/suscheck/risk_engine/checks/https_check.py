from urllib.parse import urlsplit, urlunsplit

from suscheck.risk_engine.checks.base import BaseRiskCheck
from suscheck.risk_engine.errors import ProbeError, ProbeNetworkError


class HttpsCheck(BaseRiskCheck):
    name = 'SSL Certificate'
    requires_network = True
    timeout = 5.0

    def run(self, url, domain, context):
        parsed = urlsplit(url)
        if parsed.scheme.lower() == 'http':
            return self.fail('No HTTPS - connection not encrypted', 25)

        https_url = urlunsplit(parsed._replace(scheme='https'))
        try:
            context.external.head(https_url, timeout=self.timeout)
        except ProbeNetworkError as exc:
            if exc.code == 'CERT_HAS_EXPIRED':
                return self.fail('SSL certificate expired', 30)
            if exc.code == 'CERT_INVALID':
                return self.fail('Invalid SSL certificate', 25)
            return self.warn('Could not verify SSL', 10)
        except ProbeError:
            return self.warn('Could not verify SSL', 10)

        return self.passed('Valid HTTPS certificate')
