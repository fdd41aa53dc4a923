# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

from collections import namedtuple

from idnits.diagnostics import Diagnostic


class Mode(object):
    NORMAL = 'normal'
    FORGIVE_CHECKLIST = 'forgive-checklist'
    SUBMISSION = 'submission'

    ALL = (NORMAL, FORGIVE_CHECKLIST, SUBMISSION)


mode_aliases = {
    'normal': Mode.NORMAL,
    'norm': Mode.NORMAL,
    'n': Mode.NORMAL,
    'forgive-checklist': Mode.FORGIVE_CHECKLIST,
    'f-c': Mode.FORGIVE_CHECKLIST,
    'fc': Mode.FORGIVE_CHECKLIST,
    'f': Mode.FORGIVE_CHECKLIST,
    'submission': Mode.SUBMISSION,
    'sub': Mode.SUBMISSION,
    's': Mode.SUBMISSION,
}

def get_mode_by_name(name):
    try:
        return mode_aliases[name.lower()]
    except KeyError:
        raise ValueError("Invalid mode: %s" % name)


# Severity per mode: one of 'err', 'warn', 'comm' or 'none' (not reported)
Policy = namedtuple('Policy', ['norm', 'easy', 'subm', ])

ERR = Policy('err', 'err', 'err')

POLICY = {
    # ingestion
    'ENCODING_DETECTION_FAILED':                    ERR,
    'TXT_PARSING_FAILED':                           ERR,
    'XML_PARSING_FAILED':                           ERR,
    'XML_UNSUPPORTED_VERSION':                      ERR,
    'XML_UNSUPPORTED_DOC_KIND':                     ERR,
    'XML_UNRECOGNIZED_DOC_KIND':                    ERR,
    # filename
    'FILENAME_MISSING_EXTENSION':                   ERR,
    'FILENAME_TOO_MANY_DOTS':                       ERR,
    'FILENAME_INVALID_CHARS':                       ERR,
    'FILENAME_EXTENSION_INVALID':                   ERR,
    'FILENAME_TOO_LONG':                            ERR,
    'FILENAME_MISSING_DRAFT_PREFIX':                ERR,
    'FILENAME_INVALID_VERSION_SUFFIX':              ERR,
    'FILENAME_MISSING_COMPONENTS':                  ERR,
    'FILENAME_DOCNAME_MISMATCH':                    ERR,
    # raw content
    'INVALID_ENCODING':                             Policy('err',  'warn', 'none'),
    'NON_ASCII_UTF8':                               Policy('comm', 'comm', 'none'),
    'INVALID_CTRL_CODES':                           Policy('err',  'warn', 'none'),
    # sections
    'MISSING_ABSTRACT_SECTION':                     ERR,
    'INVALID_ABSTRACT_SECTION':                     ERR,
    'INVALID_ABSTRACT_SECTION_CHILD':               ERR,
    'INVALID_ABSTRACT_SECTION_REF':                 Policy('err',  'warn', 'none'),
    'MISSING_INTRODUCTION_SECTION':                 Policy('err',  'warn', 'none'),
    'INVALID_INTRODUCTION_SECTION':                 ERR,
    'INVALID_INTRODUCTION_SECTION_CHILD':           ERR,
    'MISSING_SECURITY_CONSIDERATIONS_SECTION':      Policy('err',  'warn', 'none'),
    'INVALID_SECURITY_CONSIDERATIONS_SECTION':      ERR,
    'INVALID_SECURITY_CONSIDERATIONS_SECTION_CHILD':ERR,
    'MISSING_AUTHOR_SECTION':                       Policy('err',  'warn', 'none'),
    'TOO_MANY_AUTHORS':                             Policy('comm', 'comm', 'none'),
    'EMPTY_AUTHOR_ORGANIZATION':                    Policy('warn', 'warn', 'none'),
    'MISSING_AUTHOR_FULLNAME':                      Policy('warn', 'warn', 'none'),
    'MISSING_AUTHOR_FULLNAME_WITH_ASCII':           Policy('warn', 'warn', 'none'),
    'INVALID_AUTHOR_ROLE':                          Policy('warn', 'warn', 'none'),
    'MISSING_REFERENCES_TITLE':                     Policy('err',  'warn', 'none'),
    'INVALID_REFERENCES_TITLE':                     Policy('err',  'warn', 'none'),
    'MISSING_IANA_CONSIDERATIONS_SECTION':          Policy('err',  'warn', 'none'),
    ('MISSING_IANA_CONSIDERATIONS_SECTION', 'rfc'): Policy('comm', 'comm', 'none'),
    'INVALID_IANA_CONSIDERATIONS_SECTION':          ERR,
    'INVALID_IANA_CONSIDERATIONS_SECTION_CHILD':    ERR,
    # content
    'INVALID_DOMAIN_TLD':                           Policy('warn', 'warn', 'none'),
    'INVALID_ARPA_DOMAIN':                          Policy('warn', 'warn', 'none'),
    'INVALID_IPV4_ADDRESS':                         Policy('warn', 'warn', 'none'),
    'INVALID_IPV6_ADDRESS':                         Policy('warn', 'warn', 'none'),
    'INVALID_REQLEVEL_KEYWORD':                     Policy('comm', 'comm', 'none'),
    'MISSING_REQLEVEL_BOILERPLATE_AND_REF':         Policy('warn', 'warn', 'none'),
    'MISSING_REQLEVEL_BOILERPLATE':                 Policy('warn', 'warn', 'none'),
    'MISSING_REQLEVEL_REF':                         Policy('warn', 'warn', 'none'),
    'UNNECESSARY_REQLEVEL_BOILERPLATE':             Policy('comm', 'comm', 'none'),
    'INCORRECT_TERM_SPELLING':                      Policy('comm', 'comm', 'none'),
    'MISSING_DOC_DATE':                             Policy('warn', 'warn', 'warn'),
    'DOC_DATE_IN_PAST':                             Policy('warn', 'warn', 'warn'),
    'DOC_DATE_IN_FUTURE':                           Policy('warn', 'warn', 'warn'),
    'INVALID_OBSOLETES_LIST':                       Policy('err',  'warn', 'none'),
    'INVALID_UPDATES_LIST':                         Policy('err',  'warn', 'none'),
    'MISSING_OBSOLETES_REF':                        Policy('warn', 'warn', 'none'),
    'MISSING_UPDATES_REF':                          Policy('warn', 'warn', 'none'),
    'OBSOLETES_OBSOLETE_RFC':                       Policy('warn', 'warn', 'none'),
    'UPDATES_OBSOLETE_RFC':                         Policy('warn', 'warn', 'none'),
    # xml only
    'DEPRECATED_ELEMENT':                           Policy('warn', 'warn', 'none'),
    'UNNECESSARY_CODE_BEGINS':                      Policy('warn', 'warn', 'none'),
    'MISSING_SOURCECODE_TAG':                       Policy('warn', 'warn', 'none'),
    'TEXT_DOC_REF':                                 Policy('warn', 'warn', 'none'),
    'MISSING_IPR_ATTRIBUTE':                        ERR,
    'INVALID_IPR_VALUE':                            Policy('warn', 'warn', 'warn'),
    'FORBIDDEN_IPR_VALUE_FOR_STREAM':               ERR,
    'SUBMISSION_TYPE_INVALID':                      ERR,
    'SUBMISSION_TYPE_MISMATCH':                     ERR,
    'SUBMISSION_TYPE_UNEXPECTED':                   ERR,
    'EXTERNAL_ENTITY_DOMAIN_NOT_ALLOWED':           Policy('warn', 'warn', 'warn'),
    # txt only
    'LINE_TOO_LONG':                                Policy('err',  'warn', 'warn'),
}

def severity_for(code, mode, kind=None):
    """Look up the severity of a code in a mode

    Returns 'err', 'warn' or 'comm', or None if the code is not reported in
    this mode.  A (code, kind) entry, where kind is a document kind such as
    'rfc', takes precedence over the plain code entry.
    """
    policy = POLICY.get((code, kind)) or POLICY[code]
    if   mode == Mode.NORMAL:
        severity = policy.norm
    elif mode == Mode.FORGIVE_CHECKLIST:
        severity = policy.easy
    elif mode == Mode.SUBMISSION:
        severity = policy.subm
    else:
        raise RuntimeError("Internal error: Unexpected mode: %s" % mode)
    return None if severity == 'none' else severity

def skips(mode, *codes):
    "True if none of the given codes is reported in this mode"
    return all( severity_for(c, mode) is None for c in codes )

def nit(result, mode, code, message, kind=None, ref=None, path=None, lines=None):
    "Append a diagnostic for code to result, with the severity the mode calls for"
    severity = severity_for(code, mode, kind)
    if severity:
        result.append(Diagnostic(severity, code, message, ref, path, lines))
