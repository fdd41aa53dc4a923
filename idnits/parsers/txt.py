# Copyright The IETF Trust 2009-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Plaintext draft parser.

There is no grammar for the first page of a plaintext draft, only
conventions.  The header is two columns separated by a run of spaces: the
left column holds labels (stream, document kind, status, obsoleted RFCs,
expiry), the right column holds author names, their organizations and the
date.  The header ends at the first stretch of more than one line without
anything recognizable in it; the title and the document name follow.
"""

import datetime
import re

from idnits.diagnostics import LinePos, ParseError
from idnits.document import Document, TxtDocument
from idnits.log import log


month_names = [ 'january', 'february', 'march', 'april', 'may', 'june', 'july', 'august', 'september', 'october', 'november', 'december' ]
month_names_abbrev3 = [ n[:3] for n in month_names ]

column_split_re = re.compile(r' {2,}')

date_formats = [
    # [day] Month year
    re.compile(r'^(?:(?P<day>\d{1,2}),?\s+)?(?P<month>[A-Za-z]+)\.?,?\s+(?P<year>\d{4})$'),
    # Month day, year
    re.compile(r'^(?P<month>[A-Za-z]+)\.?\s+(?P<day>\d{1,2}),?\s+(?P<year>\d{4})$'),
]

author_re = re.compile(r"^(?:[A-Z][a-z]?\.[ -]?)+ ?(?:(?:[Dd]e|van|van de|van der|von|[Ee]l) )?[A-Z][-A-Za-z'`~]+( [A-Z][-A-Za-z'`~]+)*(?:,? ?(?:[Ee]d\.?|\([Ee]d\.?\)|[Ee]ditor))?$")

docname_re = re.compile(r'^(draft-\S+|rfc ?\d+)$', re.I)


def split_columns(line):
    "Split a header line into its left and right column"
    line = line.rstrip()
    if not line.strip():
        return '', ''
    if line[0].isspace():
        return '', line.strip()
    parts = column_split_re.split(line, maxsplit=1)
    return parts[0].strip(), (parts[1].strip() if len(parts) > 1 else '')

def parse_date(text):
    """Parse a header date such as 'June 2024', '3 June 2024' or 'June 3, 2024'

    Returns a datetime.date, with the day defaulting to 1, or None if the
    text isn't shaped like a date.  Raises ValueError for a date-shaped
    text which isn't a valid date.
    """
    for regex in date_formats:
        match = regex.match(text.strip())
        if match:
            md = match.groupdict()
            mon = md['month'].lower()
            if mon in month_names:
                month = month_names.index(mon) + 1
            elif mon in month_names_abbrev3:
                month = month_names_abbrev3.index(mon) + 1
            else:
                continue
            day = int(md['day']) if md['day'] else 1
            return datetime.date(int(md['year']), month, day)
    return None

def parse_label(doc, text):
    "Parse a left-column header label.  Returns True if the label was recognized."
    header = doc.header
    match = re.match(r'^Internet[- ]Draft\b', text, re.I)
    if match:
        doc.doc_kind = Document.DOC_KIND_DRAFT
        doc.doc_kind_certainty = Document.CERTAINTY_STRICT
        return True
    match = re.match(r'^Request for Comments:\s*(\d+)', text, re.I)
    if match:
        doc.doc_kind = Document.DOC_KIND_RFC
        doc.doc_kind_certainty = Document.CERTAINTY_STRICT
        header.rfc_number = int(match.group(1))
        return True
    match = re.match(r'^Intended [Ss]tatus:\s*(.*)$', text)
    if match:
        header.intended_status = match.group(1).strip()
        return True
    match = re.match(r'^Category:\s*(.*)$', text)
    if match:
        header.category = match.group(1).strip()
        return True
    match = re.match(r'^Obsoletes:\s*(.*)$', text)
    if match:
        header.obsoletes = match.group(1).strip()
        return True
    match = re.match(r'^Updates:\s*(.*)$', text)
    if match:
        header.updates = match.group(1).strip()
        return True
    match = re.match(r'^ISSN:\s*(.*)$', text)
    if match:
        header.issn = match.group(1).strip()
        return True
    match = re.match(r'^Expires:?\s*(.*)$', text)
    if match:
        header.expires = parse_date(match.group(1))
        return True
    return False

def parse_header_line(doc, line):
    "Parse one header line.  Returns True if anything on the line was recognized."
    header = doc.header
    left, right = split_columns(line)
    recognized = False
    if left:
        recognized = parse_label(doc, left)
    if right:
        date = parse_date(right)
        if date:
            header.date = date
            recognized = True
        elif author_re.match(right):
            header.authors.append(dict(name=right, org=None))
            recognized = True
        else:
            for author in reversed(header.authors):
                if author['org'] is None:
                    author['org'] = right
                    recognized = True
                    break
    return recognized


def parse(text, filename):
    """Parse a plaintext document

    Any failure is fatal, and raised as a ParseError carrying the line number.
    """
    doc = TxtDocument(filename, text)
    header = doc.header
    state = 'start'
    last = None
    lineno = 0
    try:
        for idx, line in enumerate(doc.lines):
            lineno = idx + 1
            if '\f' in line:
                doc.page_count += line.count('\f')
                line = line.replace('\f', '')
            if state == 'body':
                continue
            if state == 'start':
                if not line.strip():
                    continue
                header.source, first_author = split_columns(line)
                if first_author:
                    header.authors.append(dict(name=first_author, org=None))
                doc.markers['header'] = [idx, idx]
                last = idx
                state = 'header'
                continue
            if state == 'header':
                if idx <= last + 1:
                    if parse_header_line(doc, line):
                        doc.markers['header'][1] = idx
                        last = idx
                    continue
                state = 'title'
            if not line.strip():
                continue
            if state == 'title':
                doc.title = line.strip()
                doc.markers['title'] = idx
                state = 'slug'
            elif state == 'slug':
                if not line[0].isspace():
                    # unindented text: the document body has started
                    state = 'body'
                elif docname_re.match(line.strip()) or 'title+' in doc.markers:
                    doc.slug = line.strip()
                    doc.markers['slug'] = idx
                    state = 'body'
                else:
                    # the title continues on a second line
                    doc.title += ' ' + line.strip()
                    doc.markers['title+'] = idx
    except Exception as e:
        log("Could not parse %s at line %d: %s" % (filename, lineno, e))
        raise ParseError('TXT_PARSING_FAILED', 'Failed to parse the document at line %d: %s' % (lineno, e),
                         lines=[LinePos(lineno, 0)]) from e
    return doc
