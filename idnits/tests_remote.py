# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

import requests
import requests_mock

from unittest import TestCase, mock

from idnits import settings
from idnits.remote import RegistryCache, RemoteRegistry


ROOT_ZONE_HTML = """
<table id="tld-table">
  <tr>
    <td><span class="domain tld"><a href="/domains/root/db/com.html">.com</a></span></td>
    <td>generic</td>
  </tr>
  <tr>
    <td><span class="domain tld"><a href="/domains/root/db/org.html">.org</a></span></td>
    <td>generic</td>
  </tr>
  <tr>
    <td><span class="domain tld"><a href="/domains/root/db/xn--p1ai.html">.&#x440;&#x444;</a></span></td>
    <td>country-code</td>
  </tr>
</table>
"""

ARPA_ZONE_HTML = """
<table>
  <tr><td><span class="domain label">arpa</span></td></tr>
  <tr><td><span class="domain label">in-addr.arpa</span></td></tr>
  <tr><td><span class="domain label">ip6.arpa</span></td></tr>
</table>
"""


class TldLookupTests(TestCase):

    def test_lookup(self):
        with requests_mock.Mocker() as m:
            m.get(settings.IANA_ROOT_ZONE_DB_URL, text=ROOT_ZONE_HTML)
            registry = RemoteRegistry()
            self.assertTrue(registry.is_valid_domain_tld('www.example.com'))
            self.assertTrue(registry.is_valid_domain_tld('WWW.IETF.ORG'))
            self.assertTrue(registry.is_valid_domain_tld('example.xn--p1ai'))
            self.assertTrue(registry.is_valid_domain_tld('example.рф'))
            self.assertTrue(registry.is_valid_domain_tld('host.example'))
            self.assertFalse(registry.is_valid_domain_tld('host.example.zz'))
            self.assertEqual(m.call_count, 1)
            self.assertTrue(registry.cache.tlds_cached)

    def test_shared_cache(self):
        cache = RegistryCache()
        with requests_mock.Mocker() as m:
            m.get(settings.IANA_ROOT_ZONE_DB_URL, text=ROOT_ZONE_HTML)
            self.assertTrue(RemoteRegistry(cache=cache).is_valid_domain_tld('example.com'))
            self.assertFalse(RemoteRegistry(cache=cache).is_valid_domain_tld('example.zz'))
            self.assertEqual(m.call_count, 1)

    def test_clear(self):
        with requests_mock.Mocker() as m:
            m.get(settings.IANA_ROOT_ZONE_DB_URL, text=ROOT_ZONE_HTML)
            registry = RemoteRegistry()
            registry.is_valid_domain_tld('example.com')
            registry.cache.clear()
            self.assertFalse(registry.cache.tlds_cached)
            self.assertEqual(registry.cache.tlds, settings.RESERVED_TLDS)
            registry.is_valid_domain_tld('example.com')
            self.assertEqual(m.call_count, 2)

    def test_failure_is_remembered(self):
        with requests_mock.Mocker() as m:
            m.get(settings.IANA_ROOT_ZONE_DB_URL, status_code=503)
            registry = RemoteRegistry()
            self.assertTrue(registry.is_valid_domain_tld('host.example.zz'))
            self.assertTrue(registry.is_valid_domain_tld('host.example.yy'))
            self.assertEqual(m.call_count, 1)
            self.assertTrue(registry.cache.tlds_failed)

    def test_connection_error(self):
        with requests_mock.Mocker() as m:
            m.get(settings.IANA_ROOT_ZONE_DB_URL, exc=requests.exceptions.ConnectTimeout)
            self.assertTrue(RemoteRegistry().is_valid_domain_tld('host.example.zz'))

    def test_offline(self):
        with requests_mock.Mocker() as m:
            registry = RemoteRegistry(offline=True)
            self.assertTrue(registry.is_valid_domain_tld('host.example.zz'))
            self.assertTrue(registry.is_valid_arpa_domain('foo.arpa'))
            self.assertIsNone(registry.fetch_remote_doc_info('draft-ietf-foo-bar-00'))
            self.assertIsNone(registry.fetch_remote_rfc_info(2119))
            self.assertEqual(m.call_count, 0)


class ArpaLookupTests(TestCase):

    def test_lookup(self):
        with requests_mock.Mocker() as m:
            m.get(settings.IANA_ARPA_ZONE_DB_URL, text=ARPA_ZONE_HTML)
            registry = RemoteRegistry()
            self.assertTrue(registry.is_valid_arpa_domain('2.0.192.in-addr.arpa'))
            self.assertTrue(registry.is_valid_arpa_domain('8.b.d.0.1.0.0.2.ip6.arpa'))
            self.assertFalse(registry.is_valid_arpa_domain('foo.arpa'))
            self.assertEqual(registry.cache.arpa, ['in-addr.arpa', 'ip6.arpa'])
            self.assertEqual(m.call_count, 1)

    def test_failure(self):
        with requests_mock.Mocker() as m:
            m.get(settings.IANA_ARPA_ZONE_DB_URL, text='')
            registry = RemoteRegistry()
            self.assertTrue(registry.is_valid_arpa_domain('foo.arpa'))
            self.assertTrue(registry.cache.arpa_failed)


class DocumentInfoTests(TestCase):

    doc_url = settings.DATATRACKER_DOC_INFO_URL.format(name='draft-ietf-foo-bar')
    rfc_url = settings.RFC_EDITOR_RFC_INFO_URL.format(number=1234)

    def test_doc_info(self):
        info = { 'name': 'draft-ietf-foo-bar', 'stream': '/api/v1/name/streamname/ietf/', }
        with requests_mock.Mocker() as m:
            m.get(self.doc_url, json=info)
            registry = RemoteRegistry()
            self.assertEqual(registry.fetch_remote_doc_info('draft-ietf-foo-bar-00'), info)
            self.assertEqual(registry.fetch_remote_doc_info('draft-ietf-foo-bar'), info)
            self.assertEqual(m.request_history[0].headers['User-Agent'], settings.REQUESTS_USER_AGENT)

    def test_doc_info_not_found(self):
        with requests_mock.Mocker() as m:
            m.get(self.doc_url, status_code=404)
            self.assertIsNone(RemoteRegistry().fetch_remote_doc_info('draft-ietf-foo-bar-00'))

    def test_doc_info_bad_json(self):
        with requests_mock.Mocker() as m:
            m.get(self.doc_url, text='<html>Not JSON</html>')
            self.assertIsNone(RemoteRegistry().fetch_remote_doc_info('draft-ietf-foo-bar-00'))

    def test_rfc_info(self):
        info = { 'doc_id': 'RFC1234', 'obsoleted_by': ['RFC5678'], }
        with requests_mock.Mocker() as m:
            m.get(self.rfc_url, json=info)
            self.assertEqual(RemoteRegistry().fetch_remote_rfc_info(1234), info)

    def test_rfc_info_connection_error(self):
        with requests_mock.Mocker() as m:
            m.get(self.rfc_url, exc=requests.exceptions.ConnectionError)
            self.assertIsNone(RemoteRegistry().fetch_remote_rfc_info(1234))


class SessionTests(TestCase):

    def test_close(self):
        with mock.patch.object(requests.Session, 'close') as close:
            with RemoteRegistry() as registry:
                self.assertFalse(registry.offline)
            close.assert_called_once_with()
