# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

import ipaddress
import re

from idnits.diagnostics import LinePos
from idnits.modes import Mode, nit, skips
from idnits.traversal import visit_leaves


ipv4_loose_re = re.compile(r'(?<![\w.])(?P<addr>[0-9]+\.[0-9]+\.[0-9]+\.[0-9]+)(?:/(?P<prefix>[0-9]+))?(?![\w.]*\w)')
ipv6_loose_re = re.compile(r'(?<![\w:.])(?P<addr>(?P<full>[0-9a-f]+(:[0-9a-f]*){7})'
                           r'|(?P<compressed>([0-9a-f]+:)+((:[0-9a-f]+)+|:))'
                           r'|(?P<mixv4>[0-9a-f]+(:[0-9a-f]*){5}:([0-9]+\.){3}[0-9]+)'
                           r'|(?P<compressedv4>::([0-9a-f]+:)*([0-9]+\.){3}[0-9]+)'
                           r'|(?P<loopback>::[0-9]+))'
                           r'(?:/(?P<prefix>[0-9]+))?(?![\w:])', re.I)


def is_valid_ip(match, version):
    try:
        if version == 4:
            ipaddress.IPv4Address(match.group('addr'))
        else:
            ipaddress.IPv6Address(match.group('addr'))
    except ValueError:
        return False
    prefix = match.group('prefix')
    return prefix is None or int(prefix) <= (32 if version == 4 else 128)

def find_invalid_ips(text):
    "Yields (code, match) for each malformed IP address literal in the text"
    for match in ipv4_loose_re.finditer(text):
        if not is_valid_ip(match, 4):
            yield 'INVALID_IPV4_ADDRESS', match
    for match in ipv6_loose_re.finditer(text):
        if not is_valid_ip(match, 6):
            yield 'INVALID_IPV6_ADDRESS', match

def _report(result, mode, code, match, path=None, lines=None):
    if code == 'INVALID_IPV4_ADDRESS':
        nit(result, mode, code, 'IPv4 address %s is invalid.' % match.group(0),
            ref='https://datatracker.ietf.org/doc/html/rfc791', path=path, lines=lines)
    else:
        nit(result, mode, code, 'IPv6 address %s is invalid.' % match.group(0),
            ref='https://datatracker.ietf.org/doc/html/rfc4291', path=path, lines=lines)

def validate_ips(doc, mode=Mode.NORMAL):
    result = []
    if skips(mode, 'INVALID_IPV4_ADDRESS', 'INVALID_IPV6_ADDRESS'):
        return result
    if doc.type == 'xml':
        def visit(value, key, path):
            for code, match in find_invalid_ips(value):
                _report(result, mode, code, match, path='.'.join(path))
        visit_leaves(doc.data, visit)
    else:
        for num, line in enumerate(doc.lines, start=1):
            for code, match in find_invalid_ips(line):
                _report(result, mode, code, match, lines=[LinePos(num, match.start())])
    return result
