# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Filename checks, following https://authors.ietf.org/naming-your-internet-draft
"""

import re

from idnits import settings
from idnits.modes import Mode, nit


valid_basename_re = re.compile(r'^[a-z0-9-]+$')
version_suffix_re = re.compile(r'-[0-9]{2}$')

ref_url = 'https://authors.ietf.org/naming-your-internet-draft'


def validate_filename(filename, mode=Mode.NORMAL):
    result = []
    parts = filename.split('.')
    basename = parts[0]

    if len(parts) < 2:
        nit(result, mode, 'FILENAME_MISSING_EXTENSION', 'Filename must have an extension.', ref=ref_url)
    elif len(parts) > 2:
        nit(result, mode, 'FILENAME_TOO_MANY_DOTS',
            'Filename cannot have more than 1 dot, only to separate the base name from the extension.', ref=ref_url)

    if not valid_basename_re.match(basename):
        nit(result, mode, 'FILENAME_INVALID_CHARS',
            'Filename contains invalid characters. Must consist of lower alpha, digits and dash only.', ref=ref_url)

    if len(parts) < 2 or parts[1] not in ('txt', 'xml'):
        nit(result, mode, 'FILENAME_EXTENSION_INVALID', 'Filename extension must be either .txt or .xml.', ref=ref_url)

    if len(filename) > settings.FILENAME_MAX_LENGTH:
        nit(result, mode, 'FILENAME_TOO_LONG',
            'Filename cannot exceed %d characters, including the extension.' % settings.FILENAME_MAX_LENGTH,
            ref=ref_url)

    if not filename.startswith('draft-'):
        nit(result, mode, 'FILENAME_MISSING_DRAFT_PREFIX', 'Filename must start with "draft-".', ref=ref_url)

    if not version_suffix_re.search(basename):
        nit(result, mode, 'FILENAME_INVALID_VERSION_SUFFIX', 'Filename must end with a version in format 00.',
            ref=ref_url)

    if len(basename.split('-')) < 4:
        nit(result, mode, 'FILENAME_MISSING_COMPONENTS',
            'Filename must consist of at least 4 components (e.g. draft-author-subject-version).', ref=ref_url)

    return result

def validate_docname(doc, mode=Mode.NORMAL):
    "Check that the filename matches the name declared in the document"
    result = []
    if doc.get_docname() != doc.basename:
        nit(result, mode, 'FILENAME_DOCNAME_MISMATCH', 'Filename does not match the name declared in the document.',
            ref=ref_url)
    return result
