# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Documents and helpers shared by the idnits test modules.

The base documents are clean: checked offline on TODAY they produce no
diagnostics in any mode.  Tests take them apart with str.replace() to
provoke the diagnostics they are after.
"""

import datetime

from idnits.parsers import txt as txt_parser, xml as xml_parser


TODAY = datetime.date(2024, 6, 3)

XML_FILENAME = 'draft-ietf-foo-bar-00.xml'
TXT_FILENAME = 'draft-ietf-foo-bar-00.txt'

BASE_XML = """<?xml version="1.0" encoding="utf-8"?>
<rfc xmlns:xi="http://www.w3.org/2001/XInclude" version="3" ipr="trust200902" docName="draft-ietf-foo-bar-00" submissionType="IETF" category="std">
  <front>
    <title>An Example Protocol</title>
    <seriesInfo name="Internet-Draft" value="draft-ietf-foo-bar-00"/>
    <author fullname="Jane Doe" initials="J." surname="Doe">
      <organization>Example Corp</organization>
      <address>
        <email>jane@example.com</email>
      </address>
    </author>
    <date year="2024" month="June" day="3"/>
    <abstract>
      <t>This document describes an example protocol.</t>
    </abstract>
  </front>
  <middle>
    <section>
      <name>Introduction</name>
      <t>The protocol is used between a client and a server.</t>
    </section>
    <section>
      <name>Requirements Language</name>
      <t>The key words "<bcp14>MUST</bcp14>", "<bcp14>MUST NOT</bcp14>", "<bcp14>REQUIRED</bcp14>",
      "<bcp14>SHALL</bcp14>", "<bcp14>SHALL NOT</bcp14>", "<bcp14>SHOULD</bcp14>", "<bcp14>SHOULD NOT</bcp14>",
      "<bcp14>RECOMMENDED</bcp14>", "<bcp14>NOT RECOMMENDED</bcp14>", "<bcp14>MAY</bcp14>", and
      "<bcp14>OPTIONAL</bcp14>" in this document are to be interpreted as described in BCP 14
      <xref target="RFC2119"/> <xref target="RFC8174"/> when, and only when, they appear in all
      capitals, as shown here.</t>
    </section>
    <section>
      <name>Protocol</name>
      <t>A client <bcp14>MUST</bcp14> send a greeting.</t>
    </section>
    <section>
      <name>IANA Considerations</name>
      <t>This document has no IANA actions.</t>
    </section>
    <section>
      <name>Security Considerations</name>
      <t>There are no security considerations.</t>
    </section>
  </middle>
  <back>
    <references>
      <name>Normative References</name>
      <reference anchor="RFC2119" target="https://www.rfc-editor.org/info/rfc2119">
        <front>
          <title>Key words for use in RFCs to Indicate Requirement Levels</title>
          <author fullname="S. Bradner" initials="S." surname="Bradner"/>
          <date year="1997" month="March"/>
        </front>
        <seriesInfo name="BCP" value="14"/>
        <seriesInfo name="RFC" value="2119"/>
      </reference>
    </references>
  </back>
</rfc>
"""

def header_line(left, right=''):
    return ('%-50s%22s' % (left, right)).rstrip()

BASE_TXT = '\n'.join([
    '',
    '',
    '',
    '',
    header_line('Network Working Group', 'J. Doe'),
    header_line('Internet-Draft', 'Example Corp'),
    header_line('Intended status: Standards Track', '3 June 2024'),
    header_line('Expires: 5 December 2024'),
    '',
    '',
    '                          An Example Protocol',
    '                         draft-ietf-foo-bar-00',
    '',
    'Abstract',
    '',
    '   This document describes an example protocol.',
    '',
    'Status of This Memo',
    '',
    '   This Internet-Draft is submitted in full conformance with the',
    '   provisions of BCP 78 and BCP 79.',
    '',
    '1.  Introduction',
    '',
    '   The protocol is used between a client and a server.',
    '',
    '2.  Requirements Language',
    '',
    '   The key words "MUST", "MUST NOT", "REQUIRED", "SHALL", "SHALL NOT",',
    '   "SHOULD", "SHOULD NOT", "RECOMMENDED", "NOT RECOMMENDED", "MAY", and',
    '   "OPTIONAL" in this document are to be interpreted as described in',
    '   BCP 14 [RFC2119] [RFC8174] when, and only when, they appear in all',
    '   capitals, as shown here.',
    '',
    '3.  Protocol',
    '',
    '   A client MUST send a greeting.',
    '',
    '4.  IANA Considerations',
    '',
    '   This document has no IANA actions.',
    '',
    '5.  Security Considerations',
    '',
    '   There are no security considerations.',
    '',
    '6.  Normative References',
    '',
    '   [RFC2119]  Bradner, S., "Key words for use in RFCs to Indicate',
    '              Requirement Levels", BCP 14, RFC 2119, March 1997.',
    '',
    "Author's Address",
    '',
    '   Jane Doe',
    '   Example Corp',
    '',
    '   Email: jane@example.com',
    '',
])


def xml_doc(text=BASE_XML, filename=XML_FILENAME):
    return xml_parser.parse(text, filename)

def txt_doc(text=BASE_TXT, filename=TXT_FILENAME):
    return txt_parser.parse(text, filename)

def codes(result):
    return [ d.code for d in result ]

def line_number(text, fragment):
    "The 1-based number of the first line of text containing fragment"
    for num, line in enumerate(text.split('\n'), start=1):
        if fragment in line:
            return num
    raise ValueError("No line contains %r" % fragment)


class FakeRegistry(object):
    """A RemoteRegistry stand-in with canned answers

    tlds and arpa are the known suffixes; docs and rfcs map names and
    numbers to the records the datatracker and RFC Editor would return.
    """
    def __init__(self, tlds=('.com', '.org', '.net', '.arpa', '.test', '.example'), arpa=('in-addr.arpa', 'ip6.arpa'),
                 docs=None, rfcs=None):
        self.tlds = tlds
        self.arpa = arpa
        self.docs = docs or {}
        self.rfcs = rfcs or {}

    def is_valid_domain_tld(self, domain):
        return any( domain.lower().endswith(t) for t in self.tlds )

    def is_valid_arpa_domain(self, domain):
        return any( domain.lower().endswith(d) for d in self.arpa )

    def fetch_remote_doc_info(self, docname):
        return self.docs.get(docname)

    def fetch_remote_rfc_info(self, number):
        return self.rfcs.get(number)

    def close(self):
        pass
