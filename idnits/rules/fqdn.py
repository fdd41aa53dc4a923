# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

import re

from idnits.diagnostics import LinePos
from idnits.modes import Mode, nit, skips
from idnits.traversal import TEXT_KEY, visit_leaves


fqdn_re = re.compile(r'(?P<domain>(?:[a-z0-9-]+\.)+(?:[a-z0-9]{2,}))\.?(?![a-z0-9-_]+)', re.I)

text_keys = [ 't', TEXT_KEY, ]


def check_domain(registry, domain):
    "Returns the code of the problem with a domain name, or None"
    tld = domain.rsplit('.', 1)[-1]
    if tld.isdigit():
        # section numbers and addresses, not domain names
        return None
    if not registry.is_valid_domain_tld(domain):
        return 'INVALID_DOMAIN_TLD'
    if domain.lower().endswith('.arpa') and not registry.is_valid_arpa_domain(domain):
        return 'INVALID_ARPA_DOMAIN'
    return None

def _report(result, mode, code, domain, path=None, lines=None):
    if code == 'INVALID_DOMAIN_TLD':
        nit(result, mode, code, 'Domain %s has an invalid TLD.' % domain, ref='https://www.iana.org/domains/root/db',
            path=path, lines=lines)
    else:
        nit(result, mode, code, 'ARPA domain usage is invalid: %s' % domain, ref='https://www.iana.org/domains/arpa',
            path=path, lines=lines)

def validate_fqdns(doc, mode=Mode.NORMAL, registry=None):
    """Check that fully qualified domain names in the text use registered TLDs

    Needs the remote registry; without one (offline) nothing is reported.
    """
    result = []
    if registry is None or skips(mode, 'INVALID_DOMAIN_TLD', 'INVALID_ARPA_DOMAIN'):
        return result
    if doc.type == 'xml':
        def visit(value, key, path):
            if key in text_keys:
                for match in fqdn_re.finditer(value):
                    code = check_domain(registry, match.group('domain'))
                    if code:
                        _report(result, mode, code, match.group('domain'), path='.'.join(path))
        visit_leaves(doc.data, visit)
    else:
        for num, line in enumerate(doc.lines, start=1):
            for match in fqdn_re.finditer(line):
                code = check_domain(registry, match.group('domain'))
                if code:
                    _report(result, mode, code, match.group('domain'), lines=[LinePos(num, match.start())])
    return result
