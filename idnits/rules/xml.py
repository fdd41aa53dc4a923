# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Checks which only apply to RFC-XML documents.
"""

import re

from urllib.parse import urlparse

from xml2rfc.writers.base import deprecated_element_tags

from idnits import settings
from idnits.modes import Mode, nit, skips
from idnits.traversal import ATTR_KEY, TEXT_KEY, get_path, path_segment_name, visit_all, visit_leaves


code_begins_re = re.compile(r'<CODE BEGINS>')
text_doc_ref_re = re.compile(r'\[(\d+|RFC ?\d+|I-D\.[A-Za-z0-9.-]+)\]')

supported_ipr = [
    'trust200902',
    'pre5378Trust200902',
    'noModificationTrust200902',
    'noDerivativesTrust200902',
]
restricted_ipr = [ 'noModificationTrust200902', 'noDerivativesTrust200902', ]

submission_types = [ 'IETF', 'IAB', 'IRTF', 'independent', 'editorial', ]

# filename stream component -> submissionType
filename_streams = { 'ietf': 'ietf', 'iab': 'iab', 'irtf': 'irtf', }

# submissionType -> datatracker stream slug
datatracker_streams = { 'ietf': 'ietf', 'iab': 'iab', 'irtf': 'irtf', 'independent': 'ise', 'editorial': 'editorial', }


def detect_deprecated_elements(doc, mode=Mode.NORMAL):
    result = []
    if skips(mode, 'DEPRECATED_ELEMENT'):
        return result
    def visit(value, key, path):
        if key in deprecated_element_tags and ATTR_KEY not in path:
            nit(result, mode, 'DEPRECATED_ELEMENT', 'The <%s> element is deprecated.' % key,
                ref='https://www.rfc-editor.org/rfc/rfc7991.html#section-3', path='.'.join(path))
    visit_all(doc.data, visit)
    return result

def validate_code_blocks(doc, mode=Mode.NORMAL):
    "Look for <CODE BEGINS> markers, which belong in a <sourcecode> element and are added by it"
    result = []
    if skips(mode, 'UNNECESSARY_CODE_BEGINS', 'MISSING_SOURCECODE_TAG'):
        return result
    ref = 'https://authors.ietf.org/en/rfcxml-vocabulary#sourcecode'
    def visit(value, key, path):
        if code_begins_re.search(value):
            if 'sourcecode' in [ path_segment_name(s) for s in path ]:
                nit(result, mode, 'UNNECESSARY_CODE_BEGINS',
                    'The <CODE BEGINS> marker is unnecessary in a <sourcecode> element.  Use markers="true" instead.',
                    ref=ref, path='.'.join(path))
            else:
                nit(result, mode, 'MISSING_SOURCECODE_TAG',
                    'Found <CODE BEGINS> in text.  A code block should be put in a <sourcecode> element.',
                    ref=ref, path='.'.join(path))
    visit_leaves(doc.data, visit)
    return result

def validate_text_like_refs(doc, mode=Mode.NORMAL):
    "Look for text which looks like a citation, and should be an <xref> instead"
    result = []
    if skips(mode, 'TEXT_DOC_REF'):
        return result
    def visit(value, key, path):
        if key in ('t', TEXT_KEY):
            for match in text_doc_ref_re.finditer(value):
                nit(result, mode, 'TEXT_DOC_REF',
                    'Found text that looks like a citation: %s.  Use <xref> instead.' % match.group(0),
                    ref='https://authors.ietf.org/en/rfcxml-vocabulary#xref', path='.'.join(path))
    visit_leaves(doc.data, visit)
    return result

def get_submission_type(doc):
    return get_path(doc.data, 'rfc._attr.submissionType') or 'IETF'

def validate_ipr_attribute(doc, mode=Mode.NORMAL):
    result = []
    ref = 'https://authors.ietf.org/en/required-content#copyright-notice'
    ipr = get_path(doc.data, 'rfc._attr.ipr')
    if ipr is None:
        nit(result, mode, 'MISSING_IPR_ATTRIBUTE', 'The ipr attribute is missing from the <rfc> element.', ref=ref,
            path='rfc.ipr')
    elif ipr not in supported_ipr:
        nit(result, mode, 'INVALID_IPR_VALUE',
            'The ipr attribute should be one of "trust200902", "noModificationTrust200902", "noDerivativesTrust200902", '
            'or "pre5378Trust200902".', ref=ref, path='rfc.ipr')
    elif ipr in restricted_ipr and get_submission_type(doc).lower() == 'ietf':
        nit(result, mode, 'FORBIDDEN_IPR_VALUE_FOR_STREAM',
            'The ipr attribute cannot be "noDerivativesTrust200902" or "noModificationTrust200902" for an IETF stream '
            'document.', ref=ref, path='rfc.ipr')
    return result

def validate_submission_type(doc, mode=Mode.NORMAL, registry=None):
    """Check the submissionType attribute against its allowed values, the
    stream named in the filename, and the stream the datatracker has on
    record for the document
    """
    result = []
    ref = 'https://authors.ietf.org/en/rfcxml-vocabulary#submissiontype'
    submission_type = get_submission_type(doc)
    if submission_type.lower() not in [ s.lower() for s in submission_types ]:
        nit(result, mode, 'SUBMISSION_TYPE_INVALID',
            'The submissionType attribute "%s" should be one of %s.' % (submission_type, ', '.join( '"%s"' % s for s in submission_types )),
            ref=ref, path='rfc.submissionType')
        return result
    stream = submission_type.lower()
    parts = doc.basename.split('-')
    if len(parts) > 1 and parts[1] in filename_streams and filename_streams[parts[1]] != stream:
        nit(result, mode, 'SUBMISSION_TYPE_MISMATCH',
            'The submissionType attribute "%s" does not match the stream in the filename.' % submission_type,
            ref=ref, path='rfc.submissionType')
    if registry is None or skips(mode, 'SUBMISSION_TYPE_UNEXPECTED'):
        return result
    info = registry.fetch_remote_doc_info(doc.get_docname() or doc.basename)
    if info is None:
        return result
    expected = (info.get('stream') or '').rstrip('/').split('/')[-1]
    if expected != datatracker_streams[stream]:
        nit(result, mode, 'SUBMISSION_TYPE_UNEXPECTED',
            'The submissionType attribute "%s" does not match the stream of the document in the datatracker (%s).' % (submission_type, expected or 'none'),
            ref=ref, path='rfc.submissionType')
    return result

def validate_external_entities(doc, mode=Mode.NORMAL, allowed_domains=None):
    "Check that external entities are only fetched from allowed domains"
    result = []
    if allowed_domains is None:
        allowed_domains = settings.ALLOWED_DOMAINS_DEFAULT
    for entity in doc.external_entities:
        # a PUBLIC entity has the public id first, then the system url
        host = urlparse(entity.url.split('"')[-1].strip()).hostname
        if host and host.lower() not in allowed_domains:
            nit(result, mode, 'EXTERNAL_ENTITY_DOMAIN_NOT_ALLOWED',
                'The external entity %s is fetched from %s, which is not an allowed domain.' % (entity.name, host),
                ref='https://authors.ietf.org/en/rfcxml-vocabulary#xml-entities')
    return result
