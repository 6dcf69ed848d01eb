from types import SimpleNamespace
from unittest.mock import Mock

from django.test import SimpleTestCase

from suscheck.risk_engine.checks.page_content import (
    PageContentCheck,
    aggregate_weight,
    is_scannable_content_type,
    match_signatures,
)
from suscheck.risk_engine.errors import ProbeNetworkError, ProbeTimeout


def _response(content_type='text/html; charset=utf-8'):
    headers = {} if content_type is None else {'Content-Type': content_type}
    return SimpleNamespace(headers=headers, close=Mock())


def _ctx(response, html='', read_error=None):
    read_text = Mock(side_effect=read_error) if read_error else Mock(return_value=html)
    return SimpleNamespace(
        external=SimpleNamespace(
            open_page=response if callable(response) else Mock(return_value=response),
            read_text=read_text,
        )
    )


def _run(context):
    return PageContentCheck().run(url='https://example.com/', domain='example.com', context=context)


class ContentSignatureTests(SimpleTestCase):
    def test_scannable_content_types(self):
        self.assertTrue(is_scannable_content_type('text/html; charset=UTF-8'))
        self.assertTrue(is_scannable_content_type('application/javascript'))
        self.assertTrue(is_scannable_content_type(None))
        self.assertFalse(is_scannable_content_type('image/png'))
        self.assertFalse(is_scannable_content_type('application/pdf'))

    def test_password_form_with_legal_links_is_not_flagged(self):
        html = '<form><input type="password"></form><a href="/privacy-policy">Privacy</a>'
        self.assertEqual(match_signatures(html), [])

    def test_many_external_scripts_counted_only_above_limit(self):
        ten = '<script src="https://cdn.example.net/a.js"></script>' * 10
        self.assertEqual(match_signatures(ten), [])
        keys = [signature.key for signature in match_signatures(ten + '<script src="//cdn.example.net/b.js"></script>')]
        self.assertEqual(keys, ['external_scripts'])

    def test_weight_escalates_from_strongest_and_is_capped(self):
        matched = match_signatures(
            '<input type=password><iframe width="0" height="0"></iframe>'
            '<script>eval(x); String.fromCharCode(1); document.write(y); atob(z);</script>'
        )
        self.assertEqual(len(matched), 6)
        self.assertEqual(aggregate_weight(matched), 45)
        self.assertEqual(aggregate_weight([]), 0)


class PageContentCheckTests(SimpleTestCase):
    def test_password_form_without_legitimacy_fails(self):
        output = _run(_ctx(_response(), '<form action="/x"><input type="password" name="p"></form>'))
        self.assertEqual(output.status, 'fail')
        self.assertEqual(output.detail, 'Password form without legitimacy indicators')
        self.assertEqual(output.weight, 35)

    def test_hidden_iframe_fails(self):
        output = _run(_ctx(_response(), '<iframe src="https://evil.example/" width="0" height="0"></iframe>'))
        self.assertEqual(output.status, 'fail')
        self.assertEqual(output.detail, 'Invisible iframe')
        self.assertEqual(output.weight, 25)

    def test_single_suspicious_script_is_warning(self):
        output = _run(_ctx(_response(), '<script>eval(payload)</script>'))
        self.assertEqual(output.status, 'warn')
        self.assertEqual(output.detail, 'Dynamic code evaluation (eval)')
        self.assertEqual(output.weight, 15)

    def test_three_script_signatures_fail(self):
        html = '<script>eval(a); document.write(b); var c = atob(d);</script>'
        output = _run(_ctx(_response(), html))
        self.assertEqual(output.status, 'fail')
        self.assertEqual(output.weight, 25)

    def test_script_redirect_is_detected(self):
        output = _run(_ctx(_response(), '<script>window.location.href = "https://evil.example";</script>'))
        self.assertEqual(output.detail, 'Script-driven redirect')

    def test_clean_page_passes(self):
        response = _response()
        output = _run(_ctx(response, '<html><body><p>Hello</p></body></html>'))
        self.assertEqual(output.status, 'pass')
        self.assertEqual(output.detail, 'No malicious content patterns')
        response.close.assert_called_once_with()

    def test_binary_content_type_is_not_read(self):
        response = _response('image/png')
        context = _ctx(response, '<input type="password">')
        output = _run(context)
        self.assertEqual(output.status, 'pass')
        self.assertEqual(output.weight, 0)
        self.assertEqual(output.detail, 'Content type not inspected (image/png)')
        context.external.read_text.assert_not_called()
        response.close.assert_called_once_with()

    def test_missing_content_type_is_scanned(self):
        output = _run(_ctx(_response(None), '<input type="password">'))
        self.assertEqual(output.status, 'fail')

    def test_fetch_timeout_is_warning(self):
        output = _run(_ctx(Mock(side_effect=ProbeTimeout('slow'))))
        self.assertEqual(output.status, 'warn')
        self.assertEqual(output.detail, 'Page content check timed out')
        self.assertEqual(output.weight, 5)

    def test_fetch_error_is_warning(self):
        output = _run(_ctx(Mock(side_effect=ProbeNetworkError('refused'))))
        self.assertEqual(output.detail, 'Could not fetch page content')

    def test_read_timeout_still_closes_response(self):
        response = _response()
        output = _run(_ctx(response, read_error=ProbeTimeout('slow body')))
        self.assertEqual(output.detail, 'Page content check timed out')
        response.close.assert_called_once_with()
