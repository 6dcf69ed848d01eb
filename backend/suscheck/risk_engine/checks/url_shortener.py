from suscheck.domain_utils import strip_www
from suscheck.risk_engine.catalogs import URL_SHORTENERS
from suscheck.risk_engine.checks.base import BaseRiskCheck


class UrlShortenerCheck(BaseRiskCheck):
    name = 'URL Shortener'

    def run(self, url, domain, context):
        host = domain.lower()
        for candidate in (host, strip_www(host)):
            if candidate in URL_SHORTENERS:
                return self.warn(f'Uses URL shortener ({candidate}) - destination hidden', 15)

        return self.passed('Not a known URL shortener')
