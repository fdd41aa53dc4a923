# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Checks on the raw document, before it is parsed.
"""

import codecs
import magic
import re

from idnits.diagnostics import LinePos, ParseError
from idnits.modes import Mode, nit, skips


control_char_re = re.compile(r'[\x01-\x09\x0b\x0e-\x1f]+')

text_mime_types = [ 'application/xml', 'application/x-empty', ]

# libmagic charset names which python codecs don't know by that name
charset_codecs = {
    'us-ascii':     'utf-8-sig',
    'utf-8':        'utf-8-sig',
    'unknown-8bit': 'latin-1',
}


def validate_encoding(raw, mode=Mode.NORMAL):
    """Check that the raw bytes are UTF-8, and report any non-ASCII text

    Each finding lists the lines involved, with the column of the first
    offending byte on the line.
    """
    result = []
    if skips(mode, 'INVALID_ENCODING', 'NON_ASCII_UTF8'):
        return result
    if raw.startswith(codecs.BOM_UTF8):
        raw = raw[len(codecs.BOM_UTF8):]
    try:
        raw.decode('utf-8')
    except UnicodeDecodeError:
        lines = []
        for num, txt in enumerate(raw.split(b'\n'), start=1):
            try:
                txt.decode('utf-8')
            except UnicodeDecodeError as e:
                lines.append(LinePos(num, e.start))
        nit(result, mode, 'INVALID_ENCODING', 'Document is not valid UTF-8.', lines=lines,
            ref='https://authors.ietf.org/en/drafting-in-plaintext')
        return result
    lines = []
    for num, txt in enumerate(raw.split(b'\n'), start=1):
        try:
            txt.decode('ascii')
        except UnicodeDecodeError as e:
            lines.append(LinePos(num, e.start))
    if lines:
        nit(result, mode, 'NON_ASCII_UTF8', 'Document contains non-ASCII characters.', lines=lines,
            ref='https://www.rfc-editor.org/rfc/rfc7997.html')
    return result

def get_mime_type(content):
    "Returns (mime type, charset) of the content, as seen by libmagic"
    filetype = magic.Magic(mime=True, mime_encoding=True).from_buffer(content)
    if ';' in filetype and 'charset=' in filetype:
        mimetype, charset = re.split('; *charset=', filetype)
    else:
        mimetype = re.split(';', filetype)[0]
        charset = 'utf-8'
    return mimetype.strip().lower(), charset.strip().lower()

def decode_buffer(raw):
    """Decode the raw document to text, using the charset libmagic detects

    Raises ParseError for anything that isn't text.  libmagic calls text
    with C0 control characters in it 'data'; such a buffer is accepted if it
    holds no NUL bytes and is valid UTF-8, so that the control characters
    can be reported.
    """
    failed = ParseError('ENCODING_DETECTION_FAILED', 'Could not detect the document encoding.  Is this a binary file?')
    mimetype, charset = get_mime_type(raw)
    if mimetype == 'application/x-empty':
        return ''
    if mimetype == 'application/octet-stream':
        if b'\x00' in raw:
            raise failed
        charset = 'utf-8'
    elif not (mimetype.startswith('text/') or mimetype in text_mime_types) or charset == 'binary':
        raise failed
    try:
        text = raw.decode(charset_codecs.get(charset, charset))
    except (LookupError, UnicodeDecodeError) as e:
        raise failed from e
    # utf-16 and utf-32 keep their byte order mark as a character
    if text.startswith('\ufeff'):
        text = text[1:]
    return text

def validate_content(text, mode=Mode.NORMAL):
    "Look for control characters other than LF, CR or FF"
    result = []
    lines = []
    for num, line in enumerate(text.split('\n'), start=1):
        for match in control_char_re.finditer(line):
            lines.append(LinePos(num, match.start()))
    if lines:
        nit(result, mode, 'INVALID_CTRL_CODES', 'Input contains control characters other than LF, CR or FF.',
            lines=lines)
    return result
