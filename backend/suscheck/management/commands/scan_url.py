from __future__ import annotations

import json

from django.core.management.base import BaseCommand, CommandError

from suscheck.risk_engine.errors import InputError
from suscheck.services import build_scan_response, run_scan

STATUS_LABELS = {
    'pass': 'PASS',
    'warn': 'WARN',
    'fail': 'FAIL',
}


class Command(BaseCommand):
    help = 'Scan a URL and print its sus score, verdict and check breakdown.'

    def add_arguments(self, parser):
        parser.add_argument('url', type=str, help='URL or bare domain to scan.')
        parser.add_argument('--json', action='store_true', help='Print the report as JSON.')

    def handle(self, *args, **options):
        try:
            report = run_scan(options['url'])
        except InputError as exc:
            raise CommandError(exc.message) from exc

        payload = build_scan_response(report)
        if options['json']:
            self.stdout.write(json.dumps(payload, indent=2))
            return

        self.stdout.write(f"URL: {payload['url']}")
        for check in payload['checks']:
            label = STATUS_LABELS.get(check['status'], check['status'].upper())
            self.stdout.write(f"  [{label}] {check['name']}: {check['detail']}")

        summary = f"Sus score: {payload['score']}/100 ({payload['verdict']})"
        if payload['verdict'] == 'safe':
            self.stdout.write(self.style.SUCCESS(summary))
        elif payload['verdict'] == 'caution':
            self.stdout.write(self.style.WARNING(summary))
        else:
            self.stdout.write(self.style.ERROR(summary))
