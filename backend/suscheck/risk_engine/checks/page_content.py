from __future__ import annotations

from dataclasses import dataclass
import re

from suscheck.risk_engine.catalogs import SCANNABLE_CONTENT_TYPES
from suscheck.risk_engine.checks.base import BaseRiskCheck
from suscheck.risk_engine.errors import ProbeError, ProbeTimeout

CRITICAL = 'critical'
SUSPICIOUS = 'suspicious'
MINOR = 'minor'

PASSWORD_INPUT_RE = re.compile(r'<input\b[^>]*\btype\s*=\s*["\']?password', re.IGNORECASE)
LEGITIMACY_LINK_RE = re.compile(r'href\s*=\s*["\']?[^"\'\s>]*(privacy|terms|legal)', re.IGNORECASE)
COPYRIGHT_RE = re.compile(r'(©|&copy;|&#169;|\bcopyright\b)', re.IGNORECASE)
HIDDEN_IFRAME_RE = re.compile(
    r'<iframe\b[^>]*('
    r'\bwidth\s*=\s*["\']?0(px)?["\'\s>]'
    r'|\bheight\s*=\s*["\']?0(px)?["\'\s>]'
    r'|\b(width|height)\s*:\s*0(px)?\s*[;"\']'
    r'|display\s*:\s*none'
    r'|visibility\s*:\s*hidden'
    r')',
    re.IGNORECASE,
)
EXTERNAL_SCRIPT_RE = re.compile(r'<script\b[^>]*\bsrc\s*=\s*["\']?(https?:)?//', re.IGNORECASE)

MAX_EXTERNAL_SCRIPTS = 10
ESCALATION_STEP = 5
MAX_CONTENT_WEIGHT = 45


@dataclass(frozen=True)
class ContentSignature:
    key: str
    pattern: re.Pattern
    category: str
    weight: int
    reason: str


SCRIPT_SIGNATURES: tuple[ContentSignature, ...] = (
    ContentSignature('eval', re.compile(r'\beval\s*\('), SUSPICIOUS, 15, 'Dynamic code evaluation (eval)'),
    ContentSignature(
        'char_codes', re.compile(r'String\.fromCharCode\s*\('), SUSPICIOUS, 15, 'Character-code string reconstruction',
    ),
    ContentSignature('document_write', re.compile(r'document\.write\s*\('), SUSPICIOUS, 10, 'Direct document.write call'),
    ContentSignature('base64', re.compile(r'\b(atob|btoa)\s*\('), SUSPICIOUS, 10, 'Base64 encode/decode in script'),
    ContentSignature(
        'js_redirect',
        re.compile(r'\b(window|document|top|self)\.location(\.href)?\s*=(?!=)|\blocation\.(replace|assign)\s*\('),
        SUSPICIOUS,
        10,
        'Script-driven redirect',
    ),
)

PASSWORD_FORM = ContentSignature(
    'password_form', PASSWORD_INPUT_RE, CRITICAL, 35, 'Password form without legitimacy indicators',
)
HIDDEN_IFRAME = ContentSignature('hidden_iframe', HIDDEN_IFRAME_RE, CRITICAL, 25, 'Invisible iframe')
EXTERNAL_SCRIPTS = ContentSignature(
    'external_scripts', EXTERNAL_SCRIPT_RE, MINOR, 5, 'Loads many external scripts',
)


def is_scannable_content_type(content_type: str | None) -> bool:
    if not content_type:
        return True
    media_type = content_type.split(';', 1)[0].strip().lower()
    return media_type in SCANNABLE_CONTENT_TYPES


def has_legitimacy_indicators(html: str) -> bool:
    return bool(LEGITIMACY_LINK_RE.search(html) or COPYRIGHT_RE.search(html))


def match_signatures(html: str) -> list[ContentSignature]:
    matched: list[ContentSignature] = []

    if PASSWORD_FORM.pattern.search(html) and not has_legitimacy_indicators(html):
        matched.append(PASSWORD_FORM)
    if HIDDEN_IFRAME.pattern.search(html):
        matched.append(HIDDEN_IFRAME)
    for signature in SCRIPT_SIGNATURES:
        if signature.pattern.search(html):
            matched.append(signature)
    if len(EXTERNAL_SCRIPTS.pattern.findall(html)) > MAX_EXTERNAL_SCRIPTS:
        matched.append(EXTERNAL_SCRIPTS)

    return matched


def aggregate_weight(matched: list[ContentSignature]) -> int:
    """Escalate to the strongest signature instead of summing every hit."""
    if not matched:
        return 0
    strongest = max(signature.weight for signature in matched)
    return min(MAX_CONTENT_WEIGHT, strongest + ESCALATION_STEP * (len(matched) - 1))


class PageContentCheck(BaseRiskCheck):
    name = 'Page Content'
    requires_network = True
    timeout = 8.0

    def run(self, url, domain, context):
        try:
            response = context.external.open_page(url, timeout=self.timeout)
        except ProbeTimeout:
            return self.warn('Page content check timed out', 5)
        except ProbeError:
            return self.warn('Could not fetch page content', 5)

        try:
            content_type = response.headers.get('Content-Type')
            if not is_scannable_content_type(content_type):
                return self.passed(f'Content type not inspected ({content_type})')
            html = context.external.read_text(response)
        except ProbeTimeout:
            return self.warn('Page content check timed out', 5)
        except ProbeError:
            return self.warn('Could not fetch page content', 5)
        finally:
            response.close()

        matched = match_signatures(html)
        if not matched:
            return self.passed('No malicious content patterns')

        detail = '; '.join(signature.reason for signature in matched)
        weight = aggregate_weight(matched)
        if any(signature.category == CRITICAL for signature in matched) or len(matched) >= 3:
            return self.fail(detail, weight)
        return self.warn(detail, weight)
