# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Document metadata checks: the document date, and the lists of RFCs the
document obsoletes or updates.
"""

import datetime
import io
import re
import xml2rfc

from contextlib import contextmanager
from xml2rfc.util.date import augment_date, extract_date

from idnits import settings
from idnits.log import log
from idnits.modes import Mode, nit, skips
from idnits.traversal import get_path


rfc_list_re = re.compile(r'^\s*[0-9]+(\s*,\s*[0-9]+)*\s*$')
if_approved_re = re.compile(r'\(if approved\)', re.I)


@contextmanager
def captured_xml2rfc_output():
    "Collect what xml2rfc would write to stdout and stderr, and log it instead"
    orig_write_out = xml2rfc.log.write_out
    orig_write_err = xml2rfc.log.write_err
    output = io.StringIO()
    xml2rfc.log.write_out = output
    xml2rfc.log.write_err = output
    try:
        yield output
    finally:
        xml2rfc.log.write_out = orig_write_out
        xml2rfc.log.write_err = orig_write_err
        if output.getvalue().strip():
            log("xml2rfc: %s" % output.getvalue().strip())

def xml_date(attr, today):
    """The date of an XML <date> element's attributes

    Missing parts are filled in the way xml2rfc does.  A missing day is
    today's day in the current month, and the 15th in any other month.
    Returns None if the parts present can't be made into a date.
    """
    year = attr.get('year')
    day = attr.get('day')
    if (year and not year.isdigit()) or (day and not day.isdigit()):
        return None
    try:
        with captured_xml2rfc_output():
            year, month, day = extract_date(attr, today)
            year, month, day = augment_date(year, month, day, today)
        if not day:
            day = today.day if (year, month) == (today.year, today.month) else 15
        return datetime.date(year, month, day)
    except (TypeError, ValueError):
        return None

def validate_date(doc, mode=Mode.NORMAL, today=None):
    "Check that the document date is within a few days of today"
    result = []
    if skips(mode, 'MISSING_DOC_DATE', 'DOC_DATE_IN_PAST', 'DOC_DATE_IN_FUTURE'):
        return result
    today = today or datetime.date.today()
    ref = 'https://authors.ietf.org/en/rfcxml-vocabulary#date'
    if doc.type == 'xml':
        attr = get_path(doc.data, 'rfc.front.date._attr')
        date = xml_date(attr, today) if attr else None
        path = 'rfc.front.date'
    else:
        date = doc.header.date
        # a month-only date in the current month is taken to mean today
        if date and date.day == 1 and (date.year, date.month) == (today.year, today.month):
            date = today
        path = None
    if date is None:
        nit(result, mode, 'MISSING_DOC_DATE', 'The document date could not be determined.', ref=ref)
        return result
    days = (date - today).days
    if days < -settings.DATE_TOLERANCE_DAYS:
        nit(result, mode, 'DOC_DATE_IN_PAST', 'The document date is %d days in the past. Is this intentional?' % -days,
            ref=ref, path=path)
    elif days > settings.DATE_TOLERANCE_DAYS:
        nit(result, mode, 'DOC_DATE_IN_FUTURE', 'The document date is %d days in the future. Is this intentional?' % days,
            ref=ref, path=path)
    return result


def parse_rfc_list(value):
    """Parse a comma-separated list of RFC numbers

    Returns a list of ints, or None if the value isn't such a list.
    """
    value = if_approved_re.sub('', value)
    if not rfc_list_re.match(value):
        return None
    return [ int(n) for n in value.split(',') ]

def is_referenced(doc, number):
    return bool(re.search(r'\bRFC[ .]?0*%d\b' % number, doc.raw_body, re.I))

def _check_rfc_list(result, doc, mode, registry, value, attr):
    code = attr.upper()
    path = 'rfc.%s' % attr if doc.type == 'xml' else None
    ref = 'https://authors.ietf.org/en/required-content#obsoletes-and-updates'
    numbers = parse_rfc_list(value)
    if numbers is None:
        nit(result, mode, 'INVALID_%s_LIST' % code,
            'The %s value "%s" must be a comma-separated list of RFC numbers.' % (attr, value), ref=ref, path=path)
        return
    for number in numbers:
        if not is_referenced(doc, number):
            nit(result, mode, 'MISSING_%s_REF' % code,
                'RFC %d is listed in %s, but is not referenced by the document.' % (number, attr), ref=ref, path=path)
    if registry is None or skips(mode, '%s_OBSOLETE_RFC' % code):
        return
    for number in numbers:
        info = registry.fetch_remote_rfc_info(number)
        if info and info.get('obsoleted_by'):
            nit(result, mode, '%s_OBSOLETE_RFC' % code,
                'The document %s RFC %d, which is already obsoleted by %s.' % (attr, number, ', '.join(info['obsoleted_by'])),
                ref=ref, path=path)

def validate_obsoletes_updates(doc, mode=Mode.NORMAL, registry=None):
    """Check the obsoletes and updates lists, and that the listed RFCs are
    referenced and not already obsolete
    """
    result = []
    for attr in ('obsoletes', 'updates'):
        if doc.type == 'xml':
            value = get_path(doc.data, 'rfc._attr.%s' % attr)
        else:
            value = getattr(doc.header, attr)
        if value and value.strip():
            _check_rfc_list(result, doc, mode, registry, value, attr)
    return result
