from __future__ import annotations

from datetime import datetime, timezone
import logging
import threading
from typing import Any

from django.conf import settings
import dns.exception
import dns.message
import dns.rcode
import dns.rdatatype
import requests
import whois

from suscheck.domain_utils import registrable_domain
from suscheck.risk_engine.errors import ProbeNetworkError, ProbeParseError, ProbeTimeout
from suscheck.risk_engine.types import RegistrationRecord

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = 'SusCheck/1.0 (+https://github.com/suscheck)'
DNS_MESSAGE_TYPE = 'application/dns-message'
URLHAUS_ANSWER_STATUSES = ('ok', 'no_results')


def _setting(name: str, default: Any) -> Any:
    return getattr(settings, name, default)


def _headers(extra: dict[str, str] | None = None) -> dict[str, str]:
    headers = {'User-Agent': _setting('SCAN_USER_AGENT', DEFAULT_USER_AGENT)}
    headers.update(extra or {})
    return headers


def classify_ssl_error(exc: Exception) -> str:
    message = str(exc).lower()
    if 'certificate has expired' in message or 'cert_has_expired' in message:
        return 'CERT_HAS_EXPIRED'
    if 'certificate' in message:
        return 'CERT_INVALID'
    return 'TLS_ERROR'


def send_request(method: str, url: str, *, timeout: float, **kwargs) -> requests.Response:
    headers = _headers(kwargs.pop('headers', None))
    try:
        return requests.request(method, url, headers=headers, timeout=timeout, **kwargs)
    except requests.exceptions.SSLError as exc:
        raise ProbeNetworkError(str(exc), code=classify_ssl_error(exc)) from exc
    except requests.exceptions.Timeout as exc:
        raise ProbeTimeout(f'{method} {url} timed out after {timeout}s') from exc
    except requests.exceptions.RequestException as exc:
        raise ProbeNetworkError(str(exc), code='CONNECTION') from exc


def _json(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ProbeParseError(f'Malformed JSON from {response.url}') from exc


def _require_success(response: requests.Response, source: str) -> None:
    if not 200 <= response.status_code < 300:
        raise ProbeNetworkError(f'{source} returned HTTP {response.status_code}', code='HTTP')


def head(url: str, timeout: float) -> requests.Response:
    return send_request('HEAD', url, timeout=timeout, allow_redirects=False)


def open_page(url: str, timeout: float) -> requests.Response:
    return send_request('GET', url, timeout=timeout, stream=True, allow_redirects=True)


def read_text(response: requests.Response, max_bytes: int) -> str:
    chunks: list[bytes] = []
    total = 0
    try:
        for chunk in response.iter_content(chunk_size=16384):
            if not chunk:
                continue
            chunks.append(chunk)
            total += len(chunk)
            if total >= max_bytes:
                break
    except requests.exceptions.Timeout as exc:
        raise ProbeTimeout('Timed out while reading page body') from exc
    except requests.exceptions.RequestException as exc:
        raise ProbeNetworkError(str(exc), code='CONNECTION') from exc

    body = b''.join(chunks)[:max_bytes]
    encoding = response.encoding or 'utf-8'
    try:
        return body.decode(encoding, errors='replace')
    except LookupError as exc:
        raise ProbeParseError(f'Unknown page encoding {encoding!r}') from exc


def _normalize_datetime(value: Any) -> datetime | None:
    if isinstance(value, list):
        value = value[0] if value else None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        normalized = candidate.replace('Z', '+00:00')
        try:
            parsed = datetime.fromisoformat(normalized)
            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=timezone.utc)
            return parsed.astimezone(timezone.utc)
        except ValueError:
            pass

        for pattern in ('%Y-%m-%d', '%Y-%m-%d %H:%M:%S', '%d-%b-%Y', '%d/%m/%Y'):
            try:
                parsed = datetime.strptime(candidate, pattern)
                return parsed.replace(tzinfo=timezone.utc)
            except ValueError:
                continue

    return None


def _vcard_values(vcard_array: Any) -> tuple[list[str], list[str]]:
    organizations: list[str] = []
    contacts: list[str] = []
    if not isinstance(vcard_array, list) or len(vcard_array) < 2 or not isinstance(vcard_array[1], list):
        return organizations, contacts

    for entry in vcard_array[1]:
        if not isinstance(entry, list) or len(entry) < 4:
            continue
        field_name = str(entry[0]).lower()
        value = entry[3]
        if isinstance(value, list):
            value = ' '.join(str(part) for part in value if part)
        text = str(value or '').strip()
        if not text:
            continue
        if field_name == 'org':
            organizations.append(text)
        elif field_name in ('fn', 'adr', 'email', 'tel'):
            contacts.append(text)
    return organizations, contacts


def _remark_texts(remarks: Any) -> list[str]:
    texts: list[str] = []
    for remark in remarks or []:
        if not isinstance(remark, dict):
            continue
        title = str(remark.get('title') or '').strip()
        description = remark.get('description') or []
        if not isinstance(description, list):
            description = [description]
        joined = ' '.join(str(item) for item in description if item is not None).strip()
        text = f'{title} {joined}'.strip()
        if text:
            texts.append(text)
    return texts


def parse_rdap_record(domain: str, payload: Any) -> RegistrationRecord:
    if not isinstance(payload, dict):
        raise ProbeParseError('RDAP payload is not an object')

    registered_at = None
    for event in payload.get('events') or []:
        if isinstance(event, dict) and event.get('eventAction') == 'registration':
            registered_at = _normalize_datetime(event.get('eventDate'))
            break

    organizations: list[str] = []
    contacts: list[str] = []
    remarks = _remark_texts(payload.get('remarks'))

    pending = list(payload.get('entities') or [])
    while pending:
        entity = pending.pop(0)
        if not isinstance(entity, dict):
            continue
        orgs, entity_contacts = _vcard_values(entity.get('vcardArray'))
        organizations.extend(orgs)
        contacts.extend(entity_contacts)
        remarks.extend(_remark_texts(entity.get('remarks')))
        pending.extend(entity.get('entities') or [])

    return RegistrationRecord(
        domain=domain,
        registered_at=registered_at,
        organizations=tuple(organizations),
        remarks=tuple(remarks),
        contacts=tuple(contacts),
        source='rdap',
    )


def get_rdap_record(domain: str, timeout: float = 5) -> RegistrationRecord | None:
    base_url = _setting('SCAN_RDAP_URL', 'https://rdap.org/domain/')
    response = send_request(
        'GET',
        f'{base_url}{domain}',
        timeout=timeout,
        headers={'Accept': 'application/rdap+json'},
    )
    if response.status_code != 200:
        logger.debug('RDAP lookup for %s returned HTTP %s', domain, response.status_code)
        return None
    return parse_rdap_record(domain, _json(response))


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return [str(item).strip() for item in value if item]
    text = str(value).strip()
    return [text] if text else []


def get_whois_record(domain: str, timeout: float = 5) -> RegistrationRecord | None:
    try:
        data = whois.whois(domain, timeout=timeout)
    except Exception:
        logger.debug('WHOIS lookup failed for %s', domain, exc_info=True)
        return None

    if data is None:
        return None

    if not isinstance(data, dict):
        data = data.__dict__

    creation_date = _normalize_datetime(data.get('creation_date'))
    organizations = _as_list(data.get('org'))
    contacts = _as_list(data.get('name')) + _as_list(data.get('emails')) + _as_list(data.get('address'))
    registrar = _as_list(data.get('registrar'))

    if creation_date is None and not organizations and not contacts:
        return None

    return RegistrationRecord(
        domain=domain,
        registered_at=creation_date,
        organizations=tuple(organizations),
        remarks=tuple(registrar),
        contacts=tuple(contacts),
        source='whois',
    )


def get_registration_record(domain: str, timeout: float = 5) -> RegistrationRecord | None:
    target = registrable_domain(domain)
    record = get_rdap_record(target, timeout=timeout)
    if record is None and _setting('SCAN_ENABLE_WHOIS_FALLBACK', True):
        record = get_whois_record(target, timeout=timeout)
    return record


def query_urlhaus_host(host: str, timeout: float = 5) -> dict[str, Any]:
    headers = {}
    auth_key = _setting('SCAN_URLHAUS_AUTH_KEY', '')
    if auth_key:
        headers['Auth-Key'] = auth_key
    response = send_request(
        'POST',
        _setting('SCAN_URLHAUS_HOST_URL', 'https://urlhaus-api.abuse.ch/v1/host/'),
        timeout=timeout,
        data={'host': host},
        headers=headers,
    )
    _require_success(response, 'URLhaus')
    payload = _json(response)
    if not isinstance(payload, dict):
        raise ProbeParseError('URLhaus payload is not an object')
    query_status = payload.get('query_status')
    if query_status not in URLHAUS_ANSWER_STATUSES:
        raise ProbeNetworkError(f'URLhaus query failed: {query_status}', code='UPSTREAM')
    return payload


def query_phishtank_url(url: str, timeout: float = 5) -> dict[str, Any]:
    data = {'url': url, 'format': 'json'}
    app_key = _setting('SCAN_PHISHTANK_APP_KEY', '')
    if app_key:
        data['app_key'] = app_key
    response = send_request(
        'POST',
        _setting('SCAN_PHISHTANK_URL', 'https://checkurl.phishtank.com/checkurl/'),
        timeout=timeout,
        data=data,
    )
    _require_success(response, 'PhishTank')
    payload = _json(response)
    if not isinstance(payload, dict):
        raise ProbeParseError('PhishTank payload is not an object')
    if not isinstance(payload.get('results'), dict):
        raise ProbeParseError('PhishTank payload has no results')
    return payload


def resolve_ipv4(host: str, timeout: float = 3) -> list[str]:
    """Resolve A records over DNS-over-HTTPS (RFC 8484 wire format)."""
    try:
        query = dns.message.make_query(host, dns.rdatatype.A)
    except dns.exception.DNSException as exc:
        raise ProbeNetworkError(str(exc), code='DNS') from exc

    response = send_request(
        'POST',
        _setting('SCAN_DOH_URL', 'https://cloudflare-dns.com/dns-query'),
        timeout=timeout,
        data=query.to_wire(),
        headers={'Accept': DNS_MESSAGE_TYPE, 'Content-Type': DNS_MESSAGE_TYPE},
    )
    if response.status_code != 200:
        raise ProbeNetworkError(f'DNS-over-HTTPS resolver returned HTTP {response.status_code}', code='DNS')

    try:
        answer = dns.message.from_wire(response.content)
    except dns.exception.DNSException as exc:
        raise ProbeParseError('Malformed DNS-over-HTTPS answer') from exc

    # NXDOMAIN and NODATA answers carry no A records; any other rcode is a resolver failure.
    rcode = answer.rcode()
    if rcode == dns.rcode.NXDOMAIN:
        return []
    if rcode != dns.rcode.NOERROR:
        raise ProbeNetworkError(f'Resolver answered {dns.rcode.to_text(rcode)} for {host}', code='DNS')

    addresses: list[str] = []
    for rrset in answer.answer:
        if rrset.rdtype == dns.rdatatype.A:
            addresses.extend(rdata.address for rdata in rrset)
    return addresses


class ExternalContext:
    """Per-scan access to upstream data.

    The registration record is fetched at most once and shared between the
    checks that need it, even when they run on different threads.
    """

    def __init__(self, domain: str, url: str):
        self.domain = domain
        self.url = url
        self._registration: RegistrationRecord | None = None
        self._registration_error: Exception | None = None
        self._registration_loaded = False
        self._registration_lock = threading.Lock()

    @property
    def registration(self) -> RegistrationRecord | None:
        with self._registration_lock:
            if not self._registration_loaded:
                try:
                    self._registration = get_registration_record(self.domain)
                except Exception as exc:
                    self._registration_error = exc
                self._registration_loaded = True
        if self._registration_error is not None:
            raise self._registration_error
        return self._registration

    def head(self, url: str, timeout: float) -> requests.Response:
        return head(url, timeout)

    def open_page(self, url: str, timeout: float) -> requests.Response:
        return open_page(url, timeout)

    def read_text(self, response: requests.Response) -> str:
        return read_text(response, int(_setting('SCAN_MAX_CONTENT_KB', 1024)) * 1024)

    def urlhaus_host(self, host: str) -> dict[str, Any]:
        return query_urlhaus_host(host)

    def phishtank_url(self, url: str) -> dict[str, Any]:
        return query_phishtank_url(url)

    def resolve_ipv4(self, host: str) -> list[str]:
        return resolve_ipv4(host)
