# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Requirement level keywords (RFC 2119, RFC 8174) and terminology checks.
"""

import re

from idnits.diagnostics import LinePos
from idnits.modes import Mode, nit, skips
from idnits.rules.sections import txt_headings
from idnits.traversal import TEXT_KEY, visit_leaves


keyword_re = re.compile(r'\b((NOT|not)\s)?(MUST|REQUIRED|SHALL|SHOULD|RECOMMENDED|OPTIONAL|MAY)(\s(NOT|not))?\b')

allowed_keywords = [
    'MUST',
    'MUST NOT',
    'REQUIRED',
    'SHALL',
    'SHALL NOT',
    'SHOULD',
    'SHOULD NOT',
    'RECOMMENDED',
    'NOT RECOMMENDED',
    'MAY',
    'OPTIONAL',
]

keyword_keys = [ 't', TEXT_KEY, 'bcp14', ]

boilerplate_re = re.compile(r'The key words "MUST", "MUST NOT", "REQUIRED", "SHALL", (?:"SHALL NOT", )?"SHOULD", "SHOULD NOT",'
                            r' "RECOMMENDED", (?:"NOT RECOMMENDED", )?"MAY", and "OPTIONAL" in this document are to be'
                            r' interpreted as described in')

rfc2119_ref_re = re.compile(r'\bRFC[ .]?2119\b', re.I)

xml_comment_re = re.compile(r'<!--.*?-->', re.S)
xml_tag_re = re.compile(r'<[^>]+>')

invalid_terms_re = re.compile(r'demultiplexor|diffserv|e[-\s]mail|internet\sdraft|ipsec|on[-\s]line|pseudo[-\s]wire|public-key'
                              r'|sub-domain|sub-options|time-stamp|us-ascii', re.I)
invalid_terms = {
    'demultiplexor':    'demultiplexer',
    'diffserv':         'Diffserv',
    'email':            'email (no hyphen)',
    'internetdraft':    'Internet-Draft (with hyphen)',
    'ipsec':            'IPsec',
    'online':           'online (no hyphen)',
    'pseudowire':       'pseudowire (no space or hyphen)',
    'publickey':        'public key (no hyphen)',
    'subdomain':        'subdomain (no hyphen)',
    'suboptions':       'suboptions (no hyphen)',
    'timestamp':        'timestamp (no hyphen)',
    'usascii':          'ASCII',
}
correct_terms = [ 'Diffserv', 'IPsec', ]


def find_keywords(text):
    "Keyword matches in the text, leaving out quoted keywords such as those of the boilerplate itself"
    return [ m for m in keyword_re.finditer(text) if not (m.start() > 0 and text[m.start()-1] == '"') ]

def normalized_text(doc):
    "The document text with markup removed and all whitespace runs collapsed to a single space"
    if doc.type == 'xml':
        text = xml_tag_re.sub('', xml_comment_re.sub('', doc.raw_body))
    else:
        text = doc.raw_body
    return ' '.join(text.split())

def has_boilerplate(text):
    return bool(boilerplate_re.search(text))

def references_text(doc):
    "The references part of the document: everything from <back> on, or from the first references heading"
    if doc.type == 'xml':
        start = doc.raw_body.find('<back')
        return doc.raw_body[start:] if start >= 0 else ''
    for idx, title in txt_headings(doc):
        if title.lower().endswith('references'):
            return '\n'.join(doc.lines[idx:])
    return ''

def validate_2119_keywords(doc, mode=Mode.NORMAL):
    """Check the use of requirement level keywords, and the boilerplate and
    reference that must come with them
    """
    result = []
    ref = 'https://datatracker.ietf.org/doc/html/rfc2119'
    if not skips(mode, 'INVALID_REQLEVEL_KEYWORD'):
        def report(match, path=None, lines=None):
            if match.group(0) not in allowed_keywords:
                nit(result, mode, 'INVALID_REQLEVEL_KEYWORD',
                    '%s is not a valid RFC2119 Requirement Level keyword.' % match.group(0), ref=ref, path=path, lines=lines)
        if doc.type == 'xml':
            def visit(value, key, path):
                if key in keyword_keys:
                    for match in find_keywords(value):
                        report(match, path='.'.join(path))
            visit_leaves(doc.data, visit)
        else:
            for num, line in enumerate(doc.lines, start=1):
                for match in find_keywords(line):
                    report(match, lines=[LinePos(num, match.start())])

    if skips(mode, 'MISSING_REQLEVEL_BOILERPLATE_AND_REF', 'MISSING_REQLEVEL_BOILERPLATE', 'MISSING_REQLEVEL_REF',
             'UNNECESSARY_REQLEVEL_BOILERPLATE'):
        return result
    text = normalized_text(doc)
    keywords = bool(find_keywords(text))
    boilerplate = has_boilerplate(text)
    reference = bool(rfc2119_ref_re.search(references_text(doc)))
    ref = 'https://authors.ietf.org/en/required-content#requirements-language'
    if keywords and not boilerplate and not reference:
        nit(result, mode, 'MISSING_REQLEVEL_BOILERPLATE_AND_REF',
            'The document uses RFC 2119 keywords, but has neither the RFC 2119 boilerplate nor a reference to RFC 2119.',
            ref=ref)
    elif keywords and not boilerplate:
        nit(result, mode, 'MISSING_REQLEVEL_BOILERPLATE',
            'The document uses RFC 2119 keywords and references RFC 2119, but the boilerplate is missing.', ref=ref)
    elif keywords and not reference:
        nit(result, mode, 'MISSING_REQLEVEL_REF',
            'The document has the RFC 2119 boilerplate, but no reference to RFC 2119.', ref=ref)
    elif boilerplate and not keywords:
        nit(result, mode, 'UNNECESSARY_REQLEVEL_BOILERPLATE',
            'The document has the RFC 2119 boilerplate, but does not use any RFC 2119 keywords.', ref=ref)
    return result


def find_bad_terms(text):
    "Yields (match, suggested spelling) for each misspelled term"
    for match in invalid_terms_re.finditer(text):
        if match.group(0) in correct_terms:
            continue
        term = re.sub(r'[\s-]', '', match.group(0)).lower()
        if term in invalid_terms:
            yield match, invalid_terms[term]

def validate_terms_style(doc, mode=Mode.NORMAL):
    result = []
    if skips(mode, 'INCORRECT_TERM_SPELLING'):
        return result
    ref = 'https://www.rfc-editor.org/materials/terms-online.txt'
    if doc.type == 'xml':
        def visit(value, key, path):
            if key in ('t', TEXT_KEY):
                for match, spelling in find_bad_terms(value):
                    nit(result, mode, 'INCORRECT_TERM_SPELLING', '"%s" should be spelled as %s.' % (match.group(0), spelling),
                        ref=ref, path='.'.join(path))
        visit_leaves(doc.data, visit)
    else:
        for num, line in enumerate(doc.lines, start=1):
            for match, spelling in find_bad_terms(line):
                nit(result, mode, 'INCORRECT_TERM_SPELLING', '"%s" should be spelled as %s.' % (match.group(0), spelling),
                    ref=ref, lines=[LinePos(num, match.start())])
    return result
