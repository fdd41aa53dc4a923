# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

from idnits.parsers import txt, xml


def get_doc_type(filename):
    "The input type, 'xml' or 'txt', going by the filename extension"
    return 'xml' if filename.endswith('.xml') else 'txt'

def parse(text, filename):
    """Parse decoded document text into a TxtDocument or XmlDocument

    Raises idnits.diagnostics.ParseError if the document can't be parsed.
    """
    if get_doc_type(filename) == 'xml':
        return xml.parse(text, filename)
    else:
        return txt.parse(text, filename)
