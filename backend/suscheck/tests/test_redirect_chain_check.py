from types import SimpleNamespace

from django.test import SimpleTestCase

from suscheck.risk_engine.checks.redirect_chain import RedirectChainCheck, is_benign_hop
from suscheck.risk_engine.errors import ProbeNetworkError


def _redirect(location, status_code=301):
    return SimpleNamespace(status_code=status_code, headers={'Location': location})


OK = SimpleNamespace(status_code=200, headers={})


def _ctx(responses):
    """Map each requested URL to a canned response."""
    calls = []

    def head(url, timeout):
        calls.append(url)
        response = responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    return SimpleNamespace(external=SimpleNamespace(head=head)), calls


class BenignHopTests(SimpleTestCase):
    def test_scheme_upgrade_is_benign(self):
        self.assertTrue(is_benign_hop('http://example.com/', 'https://example.com/'))

    def test_www_toggle_is_benign(self):
        self.assertTrue(is_benign_hop('https://example.com/a', 'https://www.example.com/a'))

    def test_path_change_is_not_benign(self):
        self.assertFalse(is_benign_hop('http://example.com/', 'https://example.com/login'))

    def test_other_host_is_not_benign(self):
        self.assertFalse(is_benign_hop('https://example.com/', 'https://example.net/'))

    def test_downgrade_is_not_benign(self):
        self.assertFalse(is_benign_hop('https://example.com/', 'http://example.com/'))


class RedirectChainCheckTests(SimpleTestCase):
    def test_no_redirects_passes(self):
        context, calls = _ctx({'https://example.com/': OK})
        output = RedirectChainCheck().run(url='https://example.com/', domain='example.com', context=context)
        self.assertEqual(output.status, 'pass')
        self.assertEqual(output.detail, 'No redirects')
        self.assertEqual(calls, ['https://example.com/'])

    def test_https_upgrade_is_a_benign_redirect(self):
        context, _ = _ctx({
            'http://example.com/': _redirect('https://example.com/'),
            'https://example.com/': OK,
        })
        output = RedirectChainCheck().run(url='http://example.com/', domain='example.com', context=context)
        self.assertEqual(output.status, 'pass')
        self.assertEqual(output.detail, '1 benign redirect(s)')
        self.assertEqual(output.weight, 0)

    def test_relative_location_is_resolved(self):
        context, calls = _ctx({
            'https://example.com/': _redirect('/welcome', status_code=302),
            'https://example.com/welcome': OK,
        })
        output = RedirectChainCheck().run(url='https://example.com/', domain='example.com', context=context)
        self.assertEqual(output.status, 'warn')
        self.assertEqual(output.detail, '1 redirect(s)')
        self.assertEqual(output.weight, 5)
        self.assertEqual(calls[-1], 'https://example.com/welcome')

    def test_loop_is_detected(self):
        context, _ = _ctx({
            'https://a.example/': _redirect('https://b.example/'),
            'https://b.example/': _redirect('https://a.example/'),
        })
        output = RedirectChainCheck().run(url='https://a.example/', domain='a.example', context=context)
        self.assertEqual(output.status, 'fail')
        self.assertEqual(output.detail, 'Redirect loop detected')
        self.assertEqual(output.weight, 30)

    def test_upgrade_back_to_start_is_still_a_loop(self):
        context, _ = _ctx({
            'https://example.com/': _redirect('http://example.com/'),
            'http://example.com/': _redirect('https://example.com/'),
        })
        output = RedirectChainCheck().run(url='https://example.com/', domain='example.com', context=context)
        self.assertEqual(output.detail, 'Redirect loop detected')

    def test_three_suspicious_hops_warn(self):
        context, _ = _ctx({
            'https://a.example/': _redirect('https://b.example/'),
            'https://b.example/': _redirect('https://c.example/'),
            'https://c.example/': _redirect('https://d.example/'),
            'https://d.example/': OK,
        })
        output = RedirectChainCheck().run(url='https://a.example/', domain='a.example', context=context)
        self.assertEqual(output.status, 'warn')
        self.assertEqual(output.detail, '3 redirects')
        self.assertEqual(output.weight, 10)

    def test_five_suspicious_hops_fail(self):
        hosts = ['a', 'b', 'c', 'd', 'e', 'f']
        responses = {
            f'https://{current}.example/': _redirect(f'https://{following}.example/')
            for current, following in zip(hosts, hosts[1:])
        }
        responses['https://f.example/'] = OK
        context, _ = _ctx(responses)
        output = RedirectChainCheck().run(url='https://a.example/', domain='a.example', context=context)
        self.assertEqual(output.status, 'fail')
        self.assertEqual(output.detail, '5 redirects (excessive)')
        self.assertEqual(output.weight, 20)

    def test_probe_error_degrades_to_warning(self):
        context, _ = _ctx({'https://example.com/': ProbeNetworkError('connection reset')})
        output = RedirectChainCheck().run(url='https://example.com/', domain='example.com', context=context)
        self.assertEqual(output.status, 'warn')
        self.assertEqual(output.detail, 'Could not check redirects')
        self.assertEqual(output.weight, 5)
