# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

from idnits import settings
from idnits.diagnostics import LinePos
from idnits.modes import Mode, nit


def validate_line_length(doc, mode=Mode.NORMAL):
    "Report the longest line, if it is longer than the limit"
    result = []
    longest_num = 0
    longest_len = settings.LINE_LENGTH_LIMIT
    for num, line in enumerate(doc.lines, start=1):
        if len(line) > longest_len:
            longest_num = num
            longest_len = len(line)
    if longest_num:
        nit(result, mode, 'LINE_TOO_LONG',
            'The document contains over-long lines of more than %d characters.' % settings.LINE_LENGTH_LIMIT,
            ref='https://authors.ietf.org/en/drafting-in-plaintext#checklist',
            lines=[LinePos(longest_num, longest_len)])
    return result
