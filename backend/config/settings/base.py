import os
from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve().parents[2]

env = environ.Env(
    DEBUG=(bool, False),
    ALLOWED_HOSTS=(list, ['localhost', '127.0.0.1']),
    CORS_ALLOW_ALL_ORIGINS=(bool, False),
    API_THROTTLE_SCAN=(str, '30/minute'),
    API_THROTTLE_DEFAULT=(str, '180/minute'),
)

environ.Env.read_env(os.path.join(BASE_DIR, '.env'))

SECRET_KEY = env('DJANGO_SECRET_KEY', default='django-insecure-change-me')
DEBUG = env('DEBUG')
ALLOWED_HOSTS = env.list('ALLOWED_HOSTS')
APP_VERSION = env('APP_VERSION', default='0.1.0')

INSTALLED_APPS = [
    'corsheaders',
    'rest_framework',
    'suscheck',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

WSGI_APPLICATION = 'config.wsgi.application'

# Scans are never persisted.
DATABASES = {}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

REST_FRAMEWORK = {
    'DEFAULT_RENDERER_CLASSES': [
        'rest_framework.renderers.JSONRenderer',
    ],
    'DEFAULT_PARSER_CLASSES': [
        'rest_framework.parsers.JSONParser',
    ],
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'UNAUTHENTICATED_USER': None,
    'DEFAULT_THROTTLE_CLASSES': [
        'rest_framework.throttling.ScopedRateThrottle',
    ],
    'DEFAULT_THROTTLE_RATES': {
        'scan': env('API_THROTTLE_SCAN'),
        'default': env('API_THROTTLE_DEFAULT'),
    },
}

CORS_ALLOW_ALL_ORIGINS = env('CORS_ALLOW_ALL_ORIGINS')
CORS_ALLOWED_ORIGINS = env.list('CORS_ALLOWED_ORIGINS', default=[])

DATA_UPLOAD_MAX_MEMORY_SIZE = env.int('DATA_UPLOAD_MAX_MEMORY_SIZE', default=65536)

SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')
USE_X_FORWARDED_HOST = True
SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = 'strict-origin-when-cross-origin'
X_FRAME_OPTIONS = 'DENY'

# Scoring
SCAN_VERDICT_SAFE_MAX = env.int('SCAN_VERDICT_SAFE_MAX', default=25)
SCAN_VERDICT_CAUTION_MAX = env.int('SCAN_VERDICT_CAUTION_MAX', default=55)

# Upstream data sources
SCAN_USER_AGENT = env('SCAN_USER_AGENT', default='SusCheck/0.1 (+https://github.com/suscheck/suscheck)')
SCAN_RDAP_URL = env('SCAN_RDAP_URL', default='https://rdap.org/domain/')
SCAN_ENABLE_WHOIS_FALLBACK = env.bool('SCAN_ENABLE_WHOIS_FALLBACK', default=True)
SCAN_URLHAUS_HOST_URL = env('SCAN_URLHAUS_HOST_URL', default='https://urlhaus-api.abuse.ch/v1/host/')
SCAN_URLHAUS_AUTH_KEY = env('SCAN_URLHAUS_AUTH_KEY', default='')
SCAN_PHISHTANK_URL = env('SCAN_PHISHTANK_URL', default='https://checkurl.phishtank.com/checkurl/')
SCAN_PHISHTANK_APP_KEY = env('SCAN_PHISHTANK_APP_KEY', default='')
SCAN_DOH_URL = env('SCAN_DOH_URL', default='https://cloudflare-dns.com/dns-query')
SCAN_MAX_CONTENT_KB = env.int('SCAN_MAX_CONTENT_KB', default=1024)

# Orchestration. 0 workers means one per network check.
SCAN_MAX_WORKERS = env.int('SCAN_MAX_WORKERS', default=0)
SCAN_JOIN_GRACE_SECONDS = env.float('SCAN_JOIN_GRACE_SECONDS', default=1.0)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': env('LOG_LEVEL', default='INFO'),
    },
}
