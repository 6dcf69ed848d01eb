from suscheck.risk_engine.checks.brand_impersonation import TyposquattingCheck
from suscheck.risk_engine.checks.dns_resolution import DnsResolutionCheck
from suscheck.risk_engine.checks.domain_age import DomainAgeCheck
from suscheck.risk_engine.checks.homograph import HomographCheck
from suscheck.risk_engine.checks.https_check import HttpsCheck
from suscheck.risk_engine.checks.page_content import PageContentCheck
from suscheck.risk_engine.checks.redirect_chain import RedirectChainCheck
from suscheck.risk_engine.checks.registration_privacy import RegistrationPrivacyCheck
from suscheck.risk_engine.checks.threat_feed_reputation import ThreatFeedReputationCheck
from suscheck.risk_engine.checks.url_patterns import UrlPatternsCheck
from suscheck.risk_engine.checks.url_shortener import UrlShortenerCheck

# Report order.
DEFAULT_CHECKS = [
    DomainAgeCheck,
    HttpsCheck,
    ThreatFeedReputationCheck,
    DnsResolutionCheck,
    UrlPatternsCheck,
    HomographCheck,
    TyposquattingCheck,
    UrlShortenerCheck,
    RedirectChainCheck,
    RegistrationPrivacyCheck,
    PageContentCheck,
]
