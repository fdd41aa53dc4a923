# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

import re
import shutil
import textwrap


def plural(l):
    n = len(l)
    return n, ('' if n==1 else 's')

def wrap(s, w=120, i=None):
    "Wrap text to the terminal width, keeping the indentation of each line on its continuation lines"
    termsize = shutil.get_terminal_size((80, 24))
    cols = min(w, max(termsize.columns, 60))

    lines = s.split('\n')
    wrapped = []
    for line in lines:
        prev_indent = ' '*(i or 4)
        indent_match = re.search(r'^(\W+)', line)
        # Change the existing wrap indentation to the original one
        if (indent_match and not i):
            prev_indent = indent_match.group(0)
        wrapped.append(textwrap.fill(line, width=cols, subsequent_indent=prev_indent))
    return '\n'.join(wrapped)
