from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable
from urllib.parse import urlsplit

from suscheck.domain_utils import is_ipv4, strip_www, top_level_domain
from suscheck.risk_engine.catalogs import (
    ABUSED_TLDS,
    DYNAMIC_SCRIPT_EXTENSIONS,
    EXECUTABLE_EXTENSIONS,
    FREE_TLDS,
    PHISHING_KEYWORDS,
)
from suscheck.risk_engine.checks.base import BaseRiskCheck

DIGIT_RUN = re.compile(r'\d{4,}')
VOWELS = set('aeiou')

MAX_DOMAIN_LENGTH = 50
MIN_RANDOM_LABEL_LENGTH = 8
MIN_VOWEL_RATIO = 0.15


@dataclass(frozen=True)
class UrlPatternRule:
    predicate: Callable[[str, str], bool]
    weight: int
    reason: str


def _path(url: str) -> str:
    return urlsplit(url).path.lower()


def _has_at_sign(url: str, host: str) -> bool:
    return '@' in url.split('://', 1)[-1]


def _links_executable(url: str, host: str) -> bool:
    return _path(url).endswith(EXECUTABLE_EXTENSIONS)


def _keyword_with_free_tld(url: str, host: str) -> bool:
    lowered = url.lower()
    return top_level_domain(host) in FREE_TLDS and any(keyword in lowered for keyword in PHISHING_KEYWORDS)


def _excessive_subdomains(url: str, host: str) -> bool:
    return len(host.split('.')) >= 5


def _has_double_hyphen(url: str, host: str) -> bool:
    return any('--' in label for label in host.split('.') if not label.startswith('xn--'))


def _dynamic_script_with_query(url: str, host: str) -> bool:
    parsed = urlsplit(url)
    return bool(parsed.query) and parsed.path.lower().endswith(DYNAMIC_SCRIPT_EXTENSIONS)


# Order is a severity tie-break: the first matching rule decides the result.
URL_PATTERN_RULES: tuple[UrlPatternRule, ...] = (
    UrlPatternRule(lambda url, host: is_ipv4(host), 30, 'Uses IP address instead of domain'),
    UrlPatternRule(_has_at_sign, 25, 'Contains @ symbol (potential redirect trick)'),
    UrlPatternRule(_links_executable, 30, 'Links directly to executable file'),
    UrlPatternRule(_keyword_with_free_tld, 30, 'Suspicious keywords with free TLD'),
    UrlPatternRule(_excessive_subdomains, 20, 'Excessive subdomains'),
    UrlPatternRule(lambda url, host: bool(DIGIT_RUN.search(host)), 15, 'Long digit sequence in domain'),
    UrlPatternRule(_has_double_hyphen, 15, 'Consecutive hyphens in domain'),
    UrlPatternRule(_dynamic_script_with_query, 10, 'Dynamic script with query parameters'),
)


def first_matching_rule(rules, url: str, host: str) -> UrlPatternRule | None:
    for rule in rules:
        if rule.predicate(url, host):
            return rule
    return None


def vowel_ratio(label: str) -> float:
    if not label:
        return 0.0
    return sum(1 for ch in label.lower() if ch in VOWELS) / len(label)


class UrlPatternsCheck(BaseRiskCheck):
    name = 'URL Patterns'
    rules = URL_PATTERN_RULES

    def run(self, url, domain, context):
        host = domain.lower()
        rule = first_matching_rule(self.rules, url, host)
        if rule is not None:
            return self.fail(rule.reason, rule.weight)

        tld = top_level_domain(host)
        if tld in ABUSED_TLDS:
            return self.warn(f'Uses .{tld} TLD (commonly abused)', 15)

        if len(host) > MAX_DOMAIN_LENGTH:
            return self.warn('Domain is unusually long', 10)

        label = strip_www(host).split('.', 1)[0]
        if len(label) > MIN_RANDOM_LABEL_LENGTH and vowel_ratio(label) < MIN_VOWEL_RATIO:
            return self.warn('Domain name looks possibly random', 10)

        return self.passed('No suspicious patterns detected')
