from suscheck.brand_intel import find_brand_match, split_host
from suscheck.risk_engine.checks.base import BaseRiskCheck


class TyposquattingCheck(BaseRiskCheck):
    name = 'Typosquatting'

    def run(self, url, domain, context):
        match = find_brand_match(domain)
        if match is None:
            return self.passed('No brand impersonation detected')

        if match.match_type == 'official':
            return self.passed(f'Official {match.brand} domain')

        if match.match_type == 'unusual-tld':
            _, tld = split_host(domain)
            return self.warn(f'Brand match with unusual TLD (.{tld})', 20)

        if match.match_type == 'typosquat':
            return self.fail(f'Very similar to {match.brand} (possible typosquatting)', 30)

        return self.warn(f'Contains {match.brand} plus padding', 25)
