from __future__ import annotations

import ipaddress
import re
from urllib.parse import urlsplit

from tldextract import extract

from suscheck.risk_engine.errors import InputError

SCHEME_PATTERN = re.compile(r'^[a-zA-Z][a-zA-Z\d+.-]*://')
ALLOWED_SCHEMES = {'http', 'https'}


def normalize_url(raw_url: str) -> tuple[str, str]:
    """Return ``(url, domain)`` for raw user input.

    A missing scheme defaults to https. The domain is the lowercased host
    with any trailing dot removed.
    """
    value = (raw_url or '').strip()
    if not value:
        raise InputError('Please provide a URL.')

    if not SCHEME_PATTERN.match(value):
        value = 'https://' + value

    try:
        parsed = urlsplit(value)
        # Accessing the port validates it.
        parsed.port
    except ValueError as exc:
        raise InputError('Invalid URL format.') from exc

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise InputError('Invalid URL format.')

    domain = (parsed.hostname or '').rstrip('.')
    if not is_likely_valid_host(domain):
        raise InputError('Invalid URL format.')

    return value, domain


def is_likely_valid_host(host: str) -> bool:
    if not host:
        return False
    if any(ch.isspace() for ch in host):
        return False
    if '..' in host or len(host) > 255:
        return False
    if is_ipv4(host):
        return True
    if '.' not in host:
        return False
    return all(label and len(label) <= 63 for label in host.split('.'))


def is_ipv4(host: str) -> bool:
    try:
        return isinstance(ipaddress.ip_address(host), ipaddress.IPv4Address)
    except ValueError:
        return False


def strip_www(host: str) -> str:
    host = (host or '').lower()
    if host.startswith('www.'):
        return host[4:]
    return host


def top_level_domain(host: str) -> str:
    return (host or '').rstrip('.').rsplit('.', 1)[-1].lower()


def registrable_domain(host: str) -> str:
    if is_ipv4(host):
        return host
    parsed = extract(host)
    return parsed.top_domain_under_public_suffix or host
