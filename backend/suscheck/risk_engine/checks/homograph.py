from suscheck.risk_engine.checks.base import BaseRiskCheck

CYRILLIC = (0x0400, 0x04FF)
GREEK = (0x0370, 0x03FF)
FULLWIDTH_LATIN = (0xFF01, 0xFF5E)


def _in_range(ch: str, bounds: tuple[int, int]) -> bool:
    return bounds[0] <= ord(ch) <= bounds[1]


def script_profile(host: str) -> dict[str, bool]:
    return {
        'latin': any('a' <= ch.lower() <= 'z' for ch in host),
        'cyrillic': any(_in_range(ch, CYRILLIC) for ch in host),
        'greek': any(_in_range(ch, GREEK) for ch in host),
        'fullwidth': any(_in_range(ch, FULLWIDTH_LATIN) for ch in host),
    }


class HomographCheck(BaseRiskCheck):
    name = 'Homograph'

    def run(self, url, domain, context):
        profile = script_profile(domain)

        if profile['latin'] and (profile['cyrillic'] or profile['greek']):
            return self.fail('Mixed character sets detected', 35)

        if profile['cyrillic'] or profile['greek'] or profile['fullwidth']:
            return self.warn('Contains look-alike characters', 20)

        if any(label.startswith('xn--') for label in domain.lower().split('.')):
            return self.warn('Internationalized domain (punycode)', 15)

        return self.passed('No look-alike characters detected')
