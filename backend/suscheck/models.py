from django.db import models


class CheckStatus(models.TextChoices):
    PASS = 'pass', 'Pass'
    WARN = 'warn', 'Warn'
    FAIL = 'fail', 'Fail'


class Verdict(models.TextChoices):
    SAFE = 'safe', 'Safe'
    CAUTION = 'caution', 'Caution'
    DANGER = 'danger', 'Danger'


class Tier(models.TextChoices):
    CRITICAL = 'critical', 'Critical'
    HIGH = 'high', 'High'
    MEDIUM = 'medium', 'Medium'
