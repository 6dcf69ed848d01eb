from datetime import datetime, timezone

from suscheck.risk_engine.checks.base import BaseRiskCheck
from suscheck.risk_engine.errors import ProbeError

VERY_NEW_DAYS = 30
NEW_DAYS = 90
RECENT_DAYS = 180


def describe_age(age_days: int) -> str:
    years = age_days // 365
    if years > 0:
        return f'{years} year' if years == 1 else f'{years} years'
    months = age_days // 30
    return f'{months} month' if months == 1 else f'{months} months'


class DomainAgeCheck(BaseRiskCheck):
    name = 'Domain Age'
    requires_network = True
    timeout = 5.0

    def run(self, url, domain, context):
        try:
            record = context.external.registration
        except ProbeError:
            return self.warn('Could not check domain age', 10)

        if record is None:
            return self.warn('Could not verify domain age', 10)

        if record.registered_at is None:
            return self.warn('Registration date not found', 10)

        now = datetime.now(timezone.utc)
        age_days = max((now - record.registered_at).days, 0)

        if age_days < VERY_NEW_DAYS:
            return self.fail(f'Registered {age_days} days ago (very new!)', 30)

        if age_days < NEW_DAYS:
            return self.warn(f'Registered {describe_age(age_days)} ago (new)', 20)

        if age_days < RECENT_DAYS:
            return self.warn(f'Registered {describe_age(age_days)} ago (relatively new)', 10)

        return self.passed(f'Registered {describe_age(age_days)} ago')
