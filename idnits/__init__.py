# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

# Static values
__version__  = '3.0.0'
NAME         = 'idnits'
VERSION      = [ int(i) if i.isdigit() else i for i in __version__.split('.') ]

DESCRIPTION  = """Report issues with a draft or RFC document.

The idnits program inspects Internet-Draft documents, in plaintext or
RFC-XML form, for a variety of conditions that should be adjusted to
bring the document into line with policies from the IETF, the IETF
Trust, and the RFC Editor.

The determination of which issues are to be reported is based on:

 * Requirements in https://authors.ietf.org/required-content
 * Requirements in https://authors.ietf.org/naming-your-internet-draft
 * The RFC-XML vocabulary, RFC 7991
 * Additional requirements captured from ADs and authors over time

"""

class Options(object):
    def __init__(self, **kwargs):
        for k,v in kwargs.items():
            if not k.startswith('__'):
                setattr(self, k, v)
    pass

default_options = Options(debug=False, docs=[], filter=[], mode='normal', offline=False, output='pretty',
                          verbose=False, version=False, )
