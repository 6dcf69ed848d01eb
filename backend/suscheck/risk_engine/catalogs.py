ABUSED_TLDS = frozenset({
    'tk', 'ml', 'ga', 'cf', 'gq',
    'top', 'xyz', 'club', 'work', 'date', 'racing', 'win', 'bid', 'stream',
    'icu', 'buzz', 'rest', 'cam', 'loan', 'download', 'click', 'link', 'zip', 'mov',
})

FREE_TLDS = frozenset({'tk', 'ml', 'ga', 'cf', 'gq'})

PHISHING_KEYWORDS = (
    'login', 'signin', 'account', 'secure', 'update', 'verify', 'confirm',
    'banking', 'password', 'wallet',
)

EXECUTABLE_EXTENSIONS = (
    '.exe', '.scr', '.bat', '.cmd', '.msi', '.jar', '.zip', '.apk', '.dmg', '.vbs', '.ps1',
)

DYNAMIC_SCRIPT_EXTENSIONS = ('.php', '.asp', '.aspx', '.jsp', '.cgi', '.pl')

URL_SHORTENERS = frozenset({
    'bit.ly', 'bitly.com', 'tinyurl.com', 't.co', 'goo.gl', 'ow.ly', 'is.gd', 'v.gd',
    'buff.ly', 'rebrand.ly', 'cutt.ly', 'shorturl.at', 'tiny.cc', 'rb.gy', 'bl.ink',
    't.ly', 's.id', 'lnkd.in', 'soo.gd', 'shorte.st', 'adf.ly', 'tr.im', 'clck.ru',
    'qr.ae', 'x.co', 'db.tt', 'trib.al', 'bit.do', 'short.io', 'urlz.fr',
})

PRIVACY_INDICATORS = (
    'privacy',
    'proxy',
    'redacted',
    'protected',
    'withheld',
    'whoisguard',
    'domains by proxy',
    'contact privacy',
    'privacyguardian',
    'perfect privacy',
    'identity protect',
    'data protected',
    'gdpr masked',
    'not disclosed',
)

SCANNABLE_CONTENT_TYPES = frozenset({
    'text/html',
    'application/xhtml+xml',
    'text/javascript',
    'application/javascript',
    'application/ecmascript',
    'text/xml',
    'application/xml',
})
