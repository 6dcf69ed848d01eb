from __future__ import annotations

from dataclasses import dataclass

from suscheck.domain_utils import strip_www, top_level_domain

# Walk order matters: the first brand that fires a rule wins.
KNOWN_BRANDS: tuple[str, ...] = (
    'paypal',
    'amazon',
    'google',
    'apple',
    'microsoft',
    'facebook',
    'instagram',
    'netflix',
    'whatsapp',
    'linkedin',
    'twitter',
    'ebay',
    'yahoo',
    'outlook',
    'office365',
    'icloud',
    'dropbox',
    'adobe',
    'spotify',
    'walmart',
    'wellsfargo',
    'bankofamerica',
    'coinbase',
    'binance',
    'fedex',
)

TRUSTED_TLDS = frozenset({'com', 'org', 'net', 'edu', 'gov'})

MAX_TYPO_DISTANCE = 2
MIN_TYPO_LABEL_LENGTH = 4
MAX_BRAND_PADDING = 4


@dataclass(frozen=True)
class BrandMatch:
    brand: str
    match_type: str
    distance: int = 0


def _levenshtein(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        curr = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            curr.append(min(
                prev[j] + 1,
                curr[j - 1] + 1,
                prev[j - 1] + cost,
            ))
        prev = curr
    return prev[-1]


def split_host(host: str) -> tuple[str, str]:
    """Return the leftmost label (after ``www.``) and the last label."""
    bare = strip_www(host)
    return bare.split('.', 1)[0], top_level_domain(bare)


def find_brand_match(host: str, brands: tuple[str, ...] = KNOWN_BRANDS) -> BrandMatch | None:
    label, tld = split_host(host)
    if not label:
        return None

    for brand in brands:
        if label == brand:
            if tld in TRUSTED_TLDS:
                return BrandMatch(brand=brand, match_type='official')
            return BrandMatch(brand=brand, match_type='unusual-tld')

        if len(label) >= MIN_TYPO_LABEL_LENGTH:
            distance = _levenshtein(label, brand)
            if 1 <= distance <= MAX_TYPO_DISTANCE:
                return BrandMatch(brand=brand, match_type='typosquat', distance=distance)

        if brand in label and len(label) - len(brand) <= MAX_BRAND_PADDING:
            return BrandMatch(brand=brand, match_type='padded')

    return None
