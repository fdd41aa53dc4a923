# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
The validation pipeline.

A run checks the filename and the raw bytes, decodes and parses the
document, and then runs the document checks in a fixed order.  Diagnostics
are returned in the order the stages ran, and within a stage in the order
they were found.  A document which can't be parsed ends the run with the
diagnostics found so far, followed by the parse failure.
"""

import logging

from collections import namedtuple

from idnits import settings
from idnits.diagnostics import ParseError
from idnits.log import log
from idnits.modes import Mode
from idnits.parsers import get_doc_type, parse
from idnits.remote import RegistryCache, RemoteRegistry
from idnits.rules import fqdn, ip, keywords, metadata, sections, txt, xml
from idnits.rules.filename import validate_docname, validate_filename
from idnits.rules.raw import decode_buffer, validate_content, validate_encoding


Stage = namedtuple('Stage', [ 'fmt', 'msg', 'func', ])


class Checker(object):
    """Runs all checks on one document at a time

    The mode, network use and remote registry cache are fixed for the
    lifetime of the checker.  With offline=True no network lookups are made,
    and the checks which depend on them report nothing.
    """
    def __init__(self, mode=Mode.NORMAL, offline=False, allowed_domains=None, progress_report=None, cache=None,
                 timeout=settings.DEFAULT_REQUESTS_TIMEOUT, today=None):
        if mode not in Mode.ALL:
            raise ValueError("Invalid mode: %s" % mode)
        self.mode = mode
        self.offline = offline
        self.allowed_domains = allowed_domains if allowed_domains is not None else settings.ALLOWED_DOMAINS_DEFAULT
        self.progress_report = progress_report
        self.today = today
        self.registry = None if offline else RemoteRegistry(cache=cache, timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        if self.registry is not None:
            self.registry.close()

    def progress(self, msg):
        log(msg, level=logging.DEBUG)
        if self.progress_report:
            self.progress_report(msg)

    def check(self, raw, filename):
        "Check a document given as bytes.  Returns a list of Diagnostics."
        if isinstance(raw, str):
            raw = raw.encode('utf-8')
        result = []

        self.progress('Validating filename...')
        result += validate_filename(filename, self.mode)
        self.progress('Validating encoding...')
        result += validate_encoding(raw, self.mode)
        try:
            self.progress('Decoding document to UTF-8...')
            text = decode_buffer(raw)
            self.progress('Validating text...')
            result += validate_content(text, self.mode)
            self.progress('Parsing %s document...' % get_doc_type(filename).upper())
            doc = parse(text, filename)
        except ParseError as e:
            log("Could not parse %s: %s" % (filename, e))
            result.append(e.diagnostic)
            return result

        for stage in self.stages:
            if stage.fmt in ('any', doc.type):
                self.progress(stage.msg)
                result += stage.func(self, doc)
        return result

    # ------------------------------------------------------------------

    def check_docname(self, doc):
        return validate_docname(doc, self.mode)

    def check_abstract(self, doc):
        return sections.validate_abstract_section(doc, self.mode)

    def check_introduction(self, doc):
        return sections.validate_introduction_section(doc, self.mode)

    def check_security_considerations(self, doc):
        return sections.validate_security_considerations_section(doc, self.mode)

    def check_authors(self, doc):
        return sections.validate_author_section(doc, self.mode)

    def check_references(self, doc):
        return sections.validate_references_section(doc, self.mode)

    def check_iana_considerations(self, doc):
        return sections.validate_iana_considerations_section(doc, self.mode)

    def check_fqdns(self, doc):
        return fqdn.validate_fqdns(doc, self.mode, registry=self.registry)

    def check_ips(self, doc):
        return ip.validate_ips(doc, self.mode)

    def check_keywords(self, doc):
        return keywords.validate_2119_keywords(doc, self.mode)

    def check_terms(self, doc):
        return keywords.validate_terms_style(doc, self.mode)

    def check_date(self, doc):
        return metadata.validate_date(doc, self.mode, today=self.today)

    def check_obsoletes_updates(self, doc):
        return metadata.validate_obsoletes_updates(doc, self.mode, registry=self.registry)

    def check_deprecated_elements(self, doc):
        return xml.detect_deprecated_elements(doc, self.mode)

    def check_code_blocks(self, doc):
        return xml.validate_code_blocks(doc, self.mode)

    def check_text_like_refs(self, doc):
        return xml.validate_text_like_refs(doc, self.mode)

    def check_ipr(self, doc):
        return xml.validate_ipr_attribute(doc, self.mode)

    def check_submission_type(self, doc):
        return xml.validate_submission_type(doc, self.mode, registry=self.registry)

    def check_external_entities(self, doc):
        return xml.validate_external_entities(doc, self.mode, allowed_domains=self.allowed_domains)

    def check_line_length(self, doc):
        return txt.validate_line_length(doc, self.mode)

    stages = [
        Stage('any', 'Validating document name...',                     check_docname),
        Stage('any', 'Validating abstract section...',                  check_abstract),
        Stage('any', 'Validating introduction section...',              check_introduction),
        Stage('any', 'Validating security considerations section...',   check_security_considerations),
        Stage('any', 'Validating author section(s)...',                 check_authors),
        Stage('any', 'Validating references section(s)...',             check_references),
        Stage('any', 'Validating IANA considerations section...',       check_iana_considerations),
        Stage('any', 'Validating FQDNs...',                             check_fqdns),
        Stage('any', 'Validating IPs...',                               check_ips),
        Stage('any', 'Validating Requirement Level Keywords...',        check_keywords),
        Stage('any', 'Validating Terms...',                             check_terms),
        Stage('any', 'Validating Date...',                              check_date),
        Stage('any', 'Validating obsoletes and updates...',             check_obsoletes_updates),
        Stage('xml', 'Looking for deprecated elements...',              check_deprecated_elements),
        Stage('xml', 'Validating code blocks...',                       check_code_blocks),
        Stage('xml', 'Validating text-like references...',              check_text_like_refs),
        Stage('xml', 'Validating ipr attribute...',                     check_ipr),
        Stage('xml', 'Validating submission type...',                   check_submission_type),
        Stage('xml', 'Validating external entities...',                 check_external_entities),
        Stage('txt', 'Validating line length...',                       check_line_length),
    ]


def check_nits(raw, filename, mode=Mode.NORMAL, offline=False, allowed_domains=None, progress_report=None, cache=None,
               **kwargs):
    """Check a document, returning the list of Diagnostics

    Remote registry lists are cached in the given RegistryCache, or in a
    fresh one for this call only.
    """
    with Checker(mode=mode, offline=offline, allowed_domains=allowed_domains, progress_report=progress_report,
                 cache=cache if cache is not None else RegistryCache(), **kwargs) as checker:
        return checker.check(raw, filename)
