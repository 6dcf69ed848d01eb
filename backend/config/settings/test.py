from .base import *  # noqa: F401,F403

DEBUG = False
SECURE_SSL_REDIRECT = False

# Keep tests isolated from real registries.
SCAN_ENABLE_WHOIS_FALLBACK = False
SCAN_JOIN_GRACE_SECONDS = 0.5

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    'DEFAULT_THROTTLE_CLASSES': [],
}
