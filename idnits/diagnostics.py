# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

from collections import namedtuple


class Severity(object):
    """Severity tags carried by every Diagnostic

    ERROR blocks the pass/fail verdict, WARNING is flagged but non-blocking,
    COMMENT is informational.
    """
    ERROR = 'err'
    WARNING = 'warn'
    COMMENT = 'comm'

    ALL = (ERROR, WARNING, COMMENT)
    longform = dict(err='error', warn='warning', comm='comment')


LinePos = namedtuple('LinePos', ['line', 'pos'])

Diagnostic = namedtuple('Diagnostic', ['severity', 'code', 'message', 'ref', 'path', 'lines', ],
                        defaults=(None, None, None, ))
Diagnostic.__doc__ = """A single reported issue.

The code is stable UPPER_SNAKE and identical across severities; the same
defect may carry a different severity in a different mode.  Line numbers in
.lines are 1-based, positions 0-based.
"""

def diagnostic_as_dict(d):
    "Render a Diagnostic as a json-friendly dict, leaving out empty fields"
    item = dict(severity=Severity.longform[d.severity], code=d.code, message=d.message)
    if d.ref:
        item['ref'] = d.ref
    if d.path:
        item['path'] = d.path
    if d.lines:
        item['lines'] = [ dict(line=l.line, pos=l.pos) for l in d.lines ]
    return item


class ParseError(Exception):
    """The document could not be ingested

    Carries the single diagnostic that replaces the rest of the run.
    """
    def __init__(self, code, message, ref=None, path=None, lines=None):
        super().__init__(message)
        self.diagnostic = Diagnostic(Severity.ERROR, code, message, ref, path, lines)
