from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import patch

from django.test import SimpleTestCase
from rest_framework.test import APIClient

from suscheck.risk_engine.types import CheckResult, RegistrationRecord, ScanReport

CHECK_NAMES = [
    'Domain Age',
    'SSL Certificate',
    'Reputation',
    'DNS Resolution',
    'URL Patterns',
    'Homograph',
    'Typosquatting',
    'URL Shortener',
    'Redirects',
    'Registration Privacy',
    'Page Content',
]


def _registration(domain, timeout=5):
    return RegistrationRecord(
        domain=domain,
        registered_at=datetime.now(timezone.utc) - timedelta(days=900),
        organizations=('Example Corp',),
    )


def _page(url, timeout):
    return SimpleNamespace(headers={'Content-Type': 'text/html'}, close=lambda: None)


class ScanApiTests(SimpleTestCase):
    def setUp(self):
        self.client = APIClient()

    @patch('suscheck.risk_engine.external.get_registration_record', side_effect=_registration)
    @patch('suscheck.risk_engine.external.resolve_ipv4', return_value=['93.184.216.34'])
    @patch('suscheck.risk_engine.external.query_phishtank_url', return_value={'results': {'in_database': False}})
    @patch('suscheck.risk_engine.external.query_urlhaus_host', return_value={'query_status': 'no_results'})
    @patch('suscheck.risk_engine.external.read_text', return_value='<html><body>Welcome</body></html>')
    @patch('suscheck.risk_engine.external.open_page', side_effect=_page)
    @patch('suscheck.risk_engine.external.head', return_value=SimpleNamespace(status_code=200, headers={}))
    def test_scan_endpoint_returns_report(self, *_mocks):
        response = self.client.post('/api/scan', {'url': 'example.com'}, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['url'], 'https://example.com')
        self.assertEqual(response.data['score'], 0)
        self.assertEqual(response.data['verdict'], 'safe')
        self.assertEqual([check['name'] for check in response.data['checks']], CHECK_NAMES)
        self.assertTrue(all(check['status'] == 'pass' for check in response.data['checks']))

    @patch('suscheck.views.run_scan')
    def test_weights_are_not_exposed(self, run_scan):
        run_scan.return_value = ScanReport(
            url='http://192.168.1.1/login',
            score=55,
            verdict='caution',
            checks=(CheckResult(name='URL Patterns', status='fail', detail='Uses IP address instead of domain', weight=30),),
        )
        response = self.client.post('/api/scan', {'url': 'http://192.168.1.1/login'}, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.data['checks'],
            [{'name': 'URL Patterns', 'status': 'fail', 'detail': 'Uses IP address instead of domain'}],
        )
        run_scan.assert_called_once_with('http://192.168.1.1/login')

    def test_missing_url_is_rejected(self):
        response = self.client.post('/api/scan', {}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'invalid_url', 'detail': 'Please provide a URL.'})

    def test_blank_url_is_rejected(self):
        response = self.client.post('/api/scan', {'url': '   '}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['detail'], 'Please provide a URL.')

    @patch('suscheck.views.run_scan')
    def test_malformed_url_is_rejected_before_scanning(self, run_scan):
        response = self.client.post('/api/scan', {'url': 'ftp://example.com/file'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'invalid_url', 'detail': 'Invalid URL format.'})
        run_scan.assert_not_called()

    def test_non_string_url_is_rejected(self):
        response = self.client.post('/api/scan', {'url': ['example.com']}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'invalid_url')

    @patch('suscheck.views.run_scan')
    def test_malformed_json_body_uses_error_envelope(self, run_scan):
        response = self.client.post('/api/scan', data='{"url": "example.com"', content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'invalid_url', 'detail': 'Request body must be valid JSON.'})
        run_scan.assert_not_called()

    @patch('suscheck.views.run_scan', side_effect=RuntimeError('pool exploded'))
    def test_unexpected_failure_returns_generic_error(self, _run_scan):
        with self.assertLogs('suscheck.views', level='ERROR'):
            response = self.client.post('/api/scan', {'url': 'example.com'}, format='json')
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.data, {'error': 'server_error', 'detail': 'Scan failed. Please try again.'})

    def test_get_is_not_allowed(self):
        response = self.client.get('/api/scan')
        self.assertEqual(response.status_code, 405)


class HealthApiTests(SimpleTestCase):
    def test_health_endpoint(self):
        response = APIClient().get('/api/health')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], 'ok')
        self.assertIn('version', response.data)
