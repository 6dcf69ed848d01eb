from suscheck.risk_engine.catalogs import PRIVACY_INDICATORS
from suscheck.risk_engine.checks.base import BaseRiskCheck
from suscheck.risk_engine.errors import ProbeError


def find_privacy_indicator(values) -> str | None:
    for value in values:
        lowered = str(value or '').lower()
        for indicator in PRIVACY_INDICATORS:
            if indicator in lowered:
                return indicator
    return None


class RegistrationPrivacyCheck(BaseRiskCheck):
    name = 'Registration Privacy'
    requires_network = True
    timeout = 5.0

    def run(self, url, domain, context):
        try:
            record = context.external.registration
        except ProbeError:
            return self.warn('Could not check registration privacy', 5)

        if record is None:
            return self.passed('No registration data to inspect')

        indicator = find_privacy_indicator((*record.organizations, *record.remarks, *record.contacts))
        if indicator:
            return self.warn(f'Registrant identity hidden ({indicator})', 15)

        return self.passed('Registrant details are public')
