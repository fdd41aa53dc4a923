# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Checks for the required sections of a document: abstract, introduction,
security considerations, authors, references and IANA considerations.

For XML documents the sections are found in the document tree.  For plain
text, section headings are lines starting in column 0, optionally numbered,
which aren't page headers or footers.
"""

import re

from idnits import settings
from idnits.diagnostics import LinePos
from idnits.modes import Mode, nit
from idnits.traversal import ATTR_KEY, as_list, find_descendant, get_path, has_path, node_text


abstract_children = [ 'dl', 'ol', 't', 'ul', ]

section_children = [
    'artwork',
    'aside',
    'blockquote',
    'dl',
    'figure',
    'iref',
    'ol',
    'section',
    'sourcecode',
    't',
    'table',
    'texttable',
    'ul',
]

introduction_names = [ 'Introduction', 'Overview', 'Background', ]
security_names = [ 'Security Considerations', ]
iana_names = [ 'IANA Considerations', ]
references_titles = [ 'Normative References', 'Informative References', 'References', ]

heading_re = re.compile(r'^(?:(?:Appendix:? )?[A-Z0-9]+\.(?:[0-9]+(?:\.[0-9]+)*\.?)?\s+)?(?P<title>\S.*?)\s*$')
page_footer_re = re.compile(r'\[Page [0-9ivx]+\]\s*$')
page_header_re = re.compile(r'^(Internet-Draft|INTERNET-DRAFT|RFC [0-9]+)\s{2,}')
address_section_re = re.compile(r"^ *([0-9]+\.)? *(Author|Editor)('s|s'|s|\(s\)) (Address|Addresses|Information)")
one_ref_re = r"(([0-9A-Z-]|I-?D.)[0-9A-Za-z-]*( [0-9A-Z-]+)?|(IEEE|ieee)[A-Za-z0-9.-]+|(ITU ?|ITU-T ?|G\\.)[A-Za-z0-9.-]+)"
ref_ref_re = re.compile(r"\[{ref}(, *{ref})*\]".format(ref=one_ref_re))


# ----------------------------------------------------------------------
# Helpers

def section_name(section):
    "The name of an XML section: its <name> child (v3) or title attribute (v2)"
    if not isinstance(section, dict):
        return None
    if 'name' in section:
        return node_text(section['name']).strip()
    return get_path(section, '_attr.title')

def section_child_keys(section):
    return [ k for k in section.keys() if k not in ('name', ATTR_KEY) ] if isinstance(section, dict) else []

def xml_sections(doc, part='middle'):
    "Top-level sections of a part of an XML document, paired with their path"
    return [ (s, 'rfc.%s.section[%d]' % (part, i)) for i, s in enumerate(as_list(get_path(doc.data, 'rfc.%s.section' % part))) ]

def find_xml_section(doc, names, parts=('middle', )):
    for part in parts:
        for section, path in xml_sections(doc, part):
            if section_name(section) in names:
                return section, path
    return None, None

def txt_headings(doc):
    "List of (line index, title) for the section headings of a text document"
    start = max([ v[-1] if isinstance(v, list) else v for v in doc.markers.values() ] or [-1]) + 1
    headings = []
    for idx, line in enumerate(doc.lines[start:], start=start):
        line = line.replace('\f', '')
        if not line.strip() or line[0].isspace():
            continue
        if page_footer_re.search(line) or page_header_re.search(line):
            continue
        match = heading_re.match(line)
        if match:
            headings.append((idx, match.group('title')))
    return headings

def find_txt_section(doc, names):
    """Returns (heading line index, list of (line index, text) for the section body)

    or (None, None) if there's no such section.
    """
    headings = txt_headings(doc)
    names = [ n.lower() for n in names ]
    for i, (idx, title) in enumerate(headings):
        if title.lower() in names:
            end = headings[i+1][0] if i+1 < len(headings) else len(doc.lines)
            body = [ (j, doc.lines[j]) for j in range(idx+1, end) ]
            body = [ (j, l) for j, l in body if l.strip() and not page_footer_re.search(l) and not page_header_re.search(l.lstrip('\f')) ]
            return idx, body
    return None, None


# ----------------------------------------------------------------------
# Abstract

def validate_abstract_section(doc, mode=Mode.NORMAL):
    result = []
    ref = 'https://authors.ietf.org/required-content#abstract'
    if doc.type == 'xml':
        if not has_path(doc.data, 'rfc.front.abstract'):
            nit(result, mode, 'MISSING_ABSTRACT_SECTION', 'The abstract section is missing.', ref=ref,
                path='rfc.front.abstract')
            return result
        abstract = doc.data['rfc']['front']['abstract']
        if not isinstance(abstract, dict) or not [ k for k in abstract.keys() if k != ATTR_KEY ]:
            nit(result, mode, 'INVALID_ABSTRACT_SECTION',
                'The abstract section must consist of at least 1 <dl>, <ol>, <t> or <ul> element.',
                ref='https://www.rfc-editor.org/rfc/rfc7991.html#section-2.1', path='rfc.front.abstract')
            return result
        for key in abstract.keys():
            if key != ATTR_KEY and key not in abstract_children:
                nit(result, mode, 'INVALID_ABSTRACT_SECTION_CHILD',
                    'The abstract section must consist of <dl>, <ol>, <t> or <ul> elements only.',
                    ref='https://www.rfc-editor.org/rfc/rfc7991.html#section-2.1', path='rfc.front.abstract.%s' % key)
                break
        match = find_descendant(abstract, lambda v, k: k == 'xref')
        if match:
            nit(result, mode, 'INVALID_ABSTRACT_SECTION_REF', 'The abstract section should not contain references.',
                ref=ref, path='rfc.front.abstract.%s' % '.'.join(match.path))
    else:
        idx, body = find_txt_section(doc, ['Abstract'])
        if idx is None:
            nit(result, mode, 'MISSING_ABSTRACT_SECTION', 'The abstract section is missing.', ref=ref)
            return result
        if not body:
            nit(result, mode, 'INVALID_ABSTRACT_SECTION', 'The abstract section is empty.', ref=ref,
                lines=[LinePos(idx+1, 0)])
            return result
        lines = [ LinePos(j+1, m.start()) for j, l in body for m in ref_ref_re.finditer(l) ]
        if lines:
            nit(result, mode, 'INVALID_ABSTRACT_SECTION_REF', 'The abstract section should not contain references.',
                ref=ref, lines=lines)
    return result


# ----------------------------------------------------------------------
# Introduction, security considerations and IANA considerations

def _validate_body_section(doc, mode, names, label, code, ref, kind=None, parts=('middle', )):
    result = []
    if doc.type == 'xml':
        section, path = find_xml_section(doc, names, parts)
        if section is None:
            nit(result, mode, 'MISSING_%s_SECTION' % code, 'The %s section is missing.' % label, kind=kind, ref=ref)
            return result
        children = section_child_keys(section)
        if not children:
            nit(result, mode, 'INVALID_%s_SECTION' % code, 'The %s section is empty.' % label, ref=ref, path=path)
        else:
            for key in children:
                if key not in section_children:
                    nit(result, mode, 'INVALID_%s_SECTION_CHILD' % code,
                        'The %s section must consist of %s elements only.' % (label, ', '.join( '<%s>' % e for e in section_children )),
                        ref='https://www.rfc-editor.org/rfc/rfc7991.html#section-2.46', path='%s.%s' % (path, key))
                    break
    else:
        idx, body = find_txt_section(doc, names)
        if idx is None:
            nit(result, mode, 'MISSING_%s_SECTION' % code, 'The %s section is missing.' % label, kind=kind, ref=ref)
        elif not body:
            nit(result, mode, 'INVALID_%s_SECTION' % code, 'The %s section is empty.' % label, ref=ref,
                lines=[LinePos(idx+1, 0)])
    return result

def validate_introduction_section(doc, mode=Mode.NORMAL):
    return _validate_body_section(doc, mode, introduction_names, 'introduction', 'INTRODUCTION',
                                  'https://authors.ietf.org/en/required-content#introduction')

def validate_security_considerations_section(doc, mode=Mode.NORMAL):
    return _validate_body_section(doc, mode, security_names, 'security considerations', 'SECURITY_CONSIDERATIONS',
                                  'https://authors.ietf.org/en/required-content#security-considerations')

def validate_iana_considerations_section(doc, mode=Mode.NORMAL):
    "A missing IANA section is less of a problem in an RFC, where it may have been removed on publication"
    return _validate_body_section(doc, mode, iana_names, 'IANA considerations', 'IANA_CONSIDERATIONS',
                                  'https://authors.ietf.org/en/required-content#iana-considerations',
                                  kind=doc.doc_kind, parts=('middle', 'back'))


# ----------------------------------------------------------------------
# Authors

def validate_author_section(doc, mode=Mode.NORMAL):
    result = []
    ref = 'https://authors.ietf.org/en/required-content#authors-addresses'
    if doc.type == 'xml':
        authors = as_list(get_path(doc.data, 'rfc.front.author'))
        if not authors:
            nit(result, mode, 'MISSING_AUTHOR_SECTION', 'The author section is missing.', ref=ref,
                path='rfc.front.author')
            return result
        if len(authors) > settings.MAX_AUTHORS:
            nit(result, mode, 'TOO_MANY_AUTHORS',
                'The document lists %d authors.  There should be no more than %d.' % (len(authors), settings.MAX_AUTHORS),
                ref='https://www.rfc-editor.org/styleguide/part2/#author_overview', path='rfc.front.author')
        for i, author in enumerate(authors):
            path = 'rfc.front.author[%d]' % i if isinstance(get_path(doc.data, 'rfc.front.author'), list) else 'rfc.front.author'
            if not isinstance(author, dict):
                author = {}
            attr = author.get(ATTR_KEY, {})
            fullname = attr.get('fullname', '').strip()
            if any( k.startswith('ascii') for k in attr ) and not fullname:
                nit(result, mode, 'MISSING_AUTHOR_FULLNAME_WITH_ASCII',
                    'The author fullname attribute must be set when ascii attributes are used.',
                    ref='https://www.rfc-editor.org/rfc/rfc7991.html#section-2.7', path='%s.fullname' % path)
            elif 'organization' not in author and not fullname:
                nit(result, mode, 'MISSING_AUTHOR_FULLNAME',
                    'The author fullname attribute is missing, and there is no organization.',
                    ref='https://www.rfc-editor.org/rfc/rfc7991.html#section-2.7', path='%s.fullname' % path)
            if 'organization' in author and not node_text(author['organization']).strip():
                nit(result, mode, 'EMPTY_AUTHOR_ORGANIZATION', 'The author organization is empty.',
                    ref='https://www.rfc-editor.org/rfc/rfc7991.html#section-2.35', path='%s.organization' % path)
            role = attr.get('role')
            if role is not None and role != 'editor':
                nit(result, mode, 'INVALID_AUTHOR_ROLE', 'The author role "%s" is invalid.  Only "editor" is allowed.' % role,
                    ref='https://www.rfc-editor.org/rfc/rfc7991.html#section-2.7', path='%s.role' % path)
    else:
        authors = doc.header.authors
        has_address_section = any( address_section_re.search(l) for l in doc.lines )
        if len(authors) > settings.MAX_AUTHORS:
            nit(result, mode, 'TOO_MANY_AUTHORS',
                'The document lists %d authors.  There should be no more than %d.' % (len(authors), settings.MAX_AUTHORS),
                ref='https://www.rfc-editor.org/styleguide/part2/#author_overview')
        if not has_address_section:
            nit(result, mode, 'MISSING_AUTHOR_SECTION', "The Authors' Addresses section is missing.", ref=ref)
    return result


# ----------------------------------------------------------------------
# References

def _check_references(result, mode, node, path):
    ref = 'https://authors.ietf.org/en/required-content#references'
    for i, refs in enumerate(as_list(node)):
        if not isinstance(refs, dict):
            refs = {}
        refs_path = '%s[%d]' % (path, i) if isinstance(node, list) else path
        title = get_path(refs, '_attr.title')
        if title is None and 'name' in refs:
            title = node_text(refs['name'])
        if not title or not title.strip():
            nit(result, mode, 'MISSING_REFERENCES_TITLE', 'The references section is missing a title.', ref=ref,
                path=refs_path)
        elif title.strip() not in references_titles:
            nit(result, mode, 'INVALID_REFERENCES_TITLE',
                'The references section title "%s" should be one of %s.' % (title.strip(), ', '.join( '"%s"' % t for t in references_titles )),
                ref=ref, path=refs_path)
        if 'references' in refs:
            _check_references(result, mode, refs['references'], '%s.references' % refs_path)

def validate_references_section(doc, mode=Mode.NORMAL):
    result = []
    if doc.type == 'xml':
        if has_path(doc.data, 'rfc.back.references'):
            _check_references(result, mode, doc.data['rfc']['back']['references'], 'rfc.back.references')
    else:
        for idx, title in txt_headings(doc):
            if title.lower().endswith('references') and title not in references_titles:
                nit(result, mode, 'INVALID_REFERENCES_TITLE',
                    'The references section title "%s" should be one of %s.' % (title, ', '.join( '"%s"' % t for t in references_titles )),
                    ref='https://authors.ietf.org/en/required-content#references', lines=[LinePos(idx+1, 0)])
    return result
