# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Lookups against IANA, the datatracker and the RFC Editor.

Every lookup fails soft: a network problem, an error status or a response
that can't be decoded is logged, and the lookup answers as if there were
nothing to report.  In offline mode nothing is fetched at all.
"""

import html
import re
import threading

from json import JSONDecodeError

import requests

from idnits import settings
from idnits.log import log


root_zone_tld_re = re.compile(r'<span class="domain tld"><a href="(?:.+?)(?P<xn>xn--[a-z0-9]+)?\.html">(?P<tld>.*?)</a></span>', re.I)
arpa_domain_re = re.compile(r'<span class="domain label">(?P<domain>.*?)</span>', re.I)

version_suffix_re = re.compile(r'-[0-9]{2}$')


class RegistryCache(object):
    """Memoized IANA registry lists

    The lists are fetched at most once per cache object, under a lock, so
    that concurrent first lookups don't fetch the same list twice.  A failed
    fetch is remembered as well, and not retried until clear() is called.
    """
    def __init__(self):
        self.lock = threading.Lock()
        self.clear()

    def clear(self):
        self.tlds = list(settings.RESERVED_TLDS)
        self.tlds_cached = False
        self.tlds_failed = False
        self.arpa = []
        self.arpa_cached = False
        self.arpa_failed = False


class RemoteRegistry(object):
    def __init__(self, cache=None, offline=False, timeout=settings.DEFAULT_REQUESTS_TIMEOUT):
        self.cache = cache if cache is not None else RegistryCache()
        self.offline = offline
        self.timeout = timeout
        self._session = requests.Session()
        self._session.headers['User-Agent'] = settings.REQUESTS_USER_AGENT

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        "Release the pooled connections of the underlying requests session"
        self._session.close()

    def _get(self, url):
        "Returns the response, or None if the request failed"
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            log("GET %s failed: %s" % (url, e))
            return None
        if response.status_code != 200:
            log("GET %s returned status %s" % (url, response.status_code))
            return None
        return response

    def _get_json(self, url):
        response = self._get(url)
        if response is None:
            return None
        try:
            return response.json()
        except (JSONDecodeError, ValueError) as e:
            log("Error decoding response from %s as JSON: %s" % (url, e))
            return None

    def _load_tlds(self):
        cache = self.cache
        with cache.lock:
            if cache.tlds_cached or cache.tlds_failed:
                return
            response = self._get(settings.IANA_ROOT_ZONE_DB_URL)
            if response is None or not response.text:
                log("Failed to fetch Root Zone TLDs from IANA")
                cache.tlds_failed = True
                return
            for match in root_zone_tld_re.finditer(response.text):
                if match.group('xn'):
                    cache.tlds.append('.%s' % match.group('xn'))
                cache.tlds.append(html.unescape(match.group('tld')))
            cache.tlds_cached = True

    def _load_arpa(self):
        cache = self.cache
        with cache.lock:
            if cache.arpa_cached or cache.arpa_failed:
                return
            response = self._get(settings.IANA_ARPA_ZONE_DB_URL)
            if response is None or not response.text:
                log("Failed to fetch ARPA Zone Domains from IANA")
                cache.arpa_failed = True
                return
            for match in arpa_domain_re.finditer(response.text):
                domain = html.unescape(match.group('domain'))
                if domain != 'arpa':
                    cache.arpa.append(domain)
            cache.arpa_cached = True

    def is_valid_domain_tld(self, domain):
        """True if the domain ends in a TLD from the IANA root zone, or a reserved TLD

        Also true when offline, or when the root zone can't be fetched.
        """
        if self.offline:
            return True
        self._load_tlds()
        if not self.cache.tlds_cached:
            return True
        domain = domain.lower()
        return any( domain.endswith(t.lower()) for t in self.cache.tlds )

    def is_valid_arpa_domain(self, domain):
        "True if the domain falls under a registered .arpa zone, or can't be checked"
        if self.offline:
            return True
        self._load_arpa()
        if not self.cache.arpa_cached:
            return True
        domain = domain.lower()
        return any( domain.endswith(d.lower()) for d in self.cache.arpa )

    def fetch_remote_doc_info(self, docname):
        "Returns the datatracker document record for a draft name (version suffix ignored), or None"
        if self.offline or not docname:
            return None
        if version_suffix_re.search(docname):
            docname = docname[:-3]
        return self._get_json(settings.DATATRACKER_DOC_INFO_URL.format(name=docname))

    def fetch_remote_rfc_info(self, number):
        "Returns the RFC Editor record for an RFC number, or None"
        if self.offline:
            return None
        return self._get_json(settings.RFC_EDITOR_RFC_INFO_URL.format(number=number))
