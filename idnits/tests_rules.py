# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

import datetime
import re

from unittest import TestCase

from idnits.diagnostics import LinePos, ParseError, Severity
from idnits.modes import Mode
from idnits.rules import fqdn, ip, keywords, metadata, sections, txt, xml
from idnits.rules.filename import validate_docname, validate_filename
from idnits.rules.raw import decode_buffer, validate_content, validate_encoding
from idnits.test_utils import (BASE_TXT, BASE_XML, TODAY, FakeRegistry, codes, header_line, line_number,
                               txt_doc, xml_doc)


XML_ABSTRACT = """    <abstract>
      <t>This document describes an example protocol.</t>
    </abstract>
"""

XML_INTRO_TEXT = '<t>The protocol is used between a client and a server.</t>'
XML_PROTOCOL_TEXT = '<t>A client <bcp14>MUST</bcp14> send a greeting.</t>'

TXT_BOILERPLATE = '\n'.join([
    '   The key words "MUST", "MUST NOT", "REQUIRED", "SHALL", "SHALL NOT",',
    '   "SHOULD", "SHOULD NOT", "RECOMMENDED", "NOT RECOMMENDED", "MAY", and',
    '   "OPTIONAL" in this document are to be interpreted as described in',
    '   BCP 14 [RFC2119] [RFC8174] when, and only when, they appear in all',
    '   capitals, as shown here.',
])
TXT_2119_REF = '\n'.join([
    '   [RFC2119]  Bradner, S., "Key words for use in RFCs to Indicate',
    '              Requirement Levels", BCP 14, RFC 2119, March 1997.',
])
TXT_OTHER_REF = '\n'.join([
    '   [RFC3986]  Berners-Lee, T., "Uniform Resource Identifier (URI):',
    '              Generic Syntax", STD 66, RFC 3986, January 2005.',
])

def with_entities(*declarations):
    "BASE_XML with an internal DTD subset holding the given entity declarations"
    return BASE_XML.replace('<rfc ', '<!DOCTYPE rfc [\n%s\n]>\n<rfc ' % '\n'.join(declarations), 1)


class FilenameTests(TestCase):

    def test_valid(self):
        self.assertEqual(validate_filename('draft-ietf-foo-bar-00.xml'), [])
        self.assertEqual(validate_filename('draft-ietf-foo-bar-12.txt'), [])

    def test_missing_extension(self):
        self.assertEqual(codes(validate_filename('draft-ietf-foo-bar-00')),
                         ['FILENAME_MISSING_EXTENSION', 'FILENAME_EXTENSION_INVALID'])

    def test_too_many_dots(self):
        self.assertIn('FILENAME_TOO_MANY_DOTS', codes(validate_filename('draft-ietf-foo.bar-00.txt')))

    def test_invalid_chars(self):
        self.assertEqual(codes(validate_filename('draft-ietf-Foo_bar-00.txt')), ['FILENAME_INVALID_CHARS'])

    def test_invalid_extension(self):
        self.assertEqual(codes(validate_filename('draft-ietf-foo-bar-00.pdf')), ['FILENAME_EXTENSION_INVALID'])

    def test_too_long(self):
        filename = 'draft-ietf-%s-00.txt' % ('a' * 40)
        self.assertEqual(codes(validate_filename(filename)), ['FILENAME_TOO_LONG'])

    def test_missing_draft_prefix(self):
        self.assertEqual(codes(validate_filename('ietf-foo-bar-00.txt')), ['FILENAME_MISSING_DRAFT_PREFIX'])

    def test_missing_version(self):
        self.assertEqual(codes(validate_filename('draft-ietf-foo-bar.txt')), ['FILENAME_INVALID_VERSION_SUFFIX'])
        self.assertEqual(codes(validate_filename('draft-ietf-foo-bar-1.txt')), ['FILENAME_INVALID_VERSION_SUFFIX'])

    def test_missing_components(self):
        self.assertEqual(codes(validate_filename('draft-foo-00.txt')), ['FILENAME_MISSING_COMPONENTS'])

    def test_errors_in_every_mode(self):
        for mode in Mode.ALL:
            result = validate_filename('draft-foo-00.txt', mode)
            self.assertEqual([ d.severity for d in result ], [Severity.ERROR])
            self.assertTrue(result[0].ref.startswith('https://authors.ietf.org/'))

    def test_docname(self):
        self.assertEqual(validate_docname(xml_doc()), [])
        self.assertEqual(validate_docname(txt_doc()), [])
        doc = xml_doc(BASE_XML.replace('docName="draft-ietf-foo-bar-00"', 'docName="draft-ietf-foo-baz-00"'))
        self.assertEqual(codes(validate_docname(doc)), ['FILENAME_DOCNAME_MISMATCH'])
        doc = txt_doc(filename='draft-ietf-foo-bar-01.txt')
        self.assertEqual(codes(validate_docname(doc)), ['FILENAME_DOCNAME_MISMATCH'])


class RawContentTests(TestCase):

    def test_invalid_utf8(self):
        result = validate_encoding(b'first line\nbad \xff\xfe bytes\n')
        self.assertEqual(codes(result), ['INVALID_ENCODING'])
        self.assertEqual(result[0].severity, Severity.ERROR)
        self.assertEqual(result[0].lines, [LinePos(2, 4)])
        self.assertEqual(validate_encoding(b'\xff', Mode.FORGIVE_CHECKLIST)[0].severity, Severity.WARNING)
        self.assertEqual(validate_encoding(b'\xff', Mode.SUBMISSION), [])

    def test_non_ascii(self):
        result = validate_encoding('café\nplain\nnaïve\n'.encode('utf-8'))
        self.assertEqual(codes(result), ['NON_ASCII_UTF8'])
        self.assertEqual(result[0].severity, Severity.COMMENT)
        self.assertEqual(result[0].lines, [LinePos(1, 3), LinePos(3, 2)])

    def test_ascii(self):
        self.assertEqual(validate_encoding(b'plain ascii\n'), [])

    def test_byte_order_mark(self):
        self.assertEqual(validate_encoding(b'\xef\xbb\xbfplain ascii\n'), [])
        result = validate_encoding(b'\xef\xbb\xbfcaf\xc3\xa9\n')
        self.assertEqual(result[0].lines, [LinePos(1, 3)])

    def test_decode(self):
        self.assertEqual(decode_buffer(b'plain'), 'plain')
        self.assertEqual(decode_buffer(b'\xef\xbb\xbfwith bom'), 'with bom')
        self.assertEqual(decode_buffer('café'.encode('utf-8')), 'café')
        self.assertEqual(decode_buffer(b'caf\xe9 au lait\n'), 'café au lait\n')
        self.assertEqual(decode_buffer(b''), '')

    def test_decode_utf16(self):
        self.assertEqual(decode_buffer(BASE_TXT.encode('utf-16')), BASE_TXT)

    def test_decode_control_chars(self):
        self.assertEqual(decode_buffer(b'abc\x01def\n'), 'abc\x01def\n')

    def test_binary(self):
        jpeg = b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        gzip = b'\x1f\x8b\x08\x00\x00\x00\x00\x00\x00\x03'
        png = b'\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR'
        for raw in [ b'text\x00with nul', b'%PDF-1.7\n', jpeg, gzip, png, ]:
            with self.assertRaises(ParseError) as cm:
                decode_buffer(raw)
            self.assertEqual(cm.exception.diagnostic.code, 'ENCODING_DETECTION_FAILED')

    def test_control_chars(self):
        result = validate_content('fine\nbell\x07here\n\x1b[0m\n')
        self.assertEqual(codes(result), ['INVALID_CTRL_CODES'])
        self.assertEqual(result[0].lines, [LinePos(2, 4), LinePos(3, 0)])

    def test_control_chars_by_mode(self):
        result = validate_content('abc\bdef\tgeh')
        self.assertEqual([ (d.code, d.severity) for d in result ], [('INVALID_CTRL_CODES', Severity.ERROR)])
        self.assertEqual(result[0].lines, [LinePos(1, 3), LinePos(1, 7)])
        result = validate_content('abc\bdef\tgeh', Mode.FORGIVE_CHECKLIST)
        self.assertEqual([ (d.code, d.severity) for d in result ], [('INVALID_CTRL_CODES', Severity.WARNING)])
        self.assertEqual(result[0].lines, [LinePos(1, 3), LinePos(1, 7)])
        self.assertEqual(validate_content('abc\bdef\tgeh', Mode.SUBMISSION), [])

    def test_allowed_control_chars(self):
        self.assertEqual(validate_content('line\r\n\fpage\n'), [])
        self.assertEqual(codes(validate_content('tab\there')), ['INVALID_CTRL_CODES'])


class LineLengthTests(TestCase):

    def test_short_lines(self):
        self.assertEqual(txt.validate_line_length(txt_doc()), [])

    def test_longest_line_is_reported(self):
        text = BASE_TXT + '   ' + 'x' * 75 + '\n' + '   ' + 'y' * 80 + '\n'
        result = txt.validate_line_length(txt_doc(text))
        self.assertEqual(codes(result), ['LINE_TOO_LONG'])
        self.assertEqual(result[0].lines, [LinePos(line_number(text, 'y' * 80), 83)])
        self.assertEqual(result[0].severity, Severity.ERROR)
        self.assertEqual(txt.validate_line_length(txt_doc(text), Mode.SUBMISSION)[0].severity, Severity.WARNING)


class AbstractSectionTests(TestCase):

    def test_xml_missing(self):
        doc = xml_doc(BASE_XML.replace(XML_ABSTRACT, ''))
        self.assertEqual(codes(sections.validate_abstract_section(doc)), ['MISSING_ABSTRACT_SECTION'])

    def test_xml_empty(self):
        doc = xml_doc(BASE_XML.replace(XML_ABSTRACT, '    <abstract/>\n'))
        self.assertEqual(codes(sections.validate_abstract_section(doc)), ['INVALID_ABSTRACT_SECTION'])

    def test_xml_invalid_child(self):
        doc = xml_doc(BASE_XML.replace('</abstract>', '<artwork>ascii art</artwork>\n    </abstract>'))
        result = sections.validate_abstract_section(doc)
        self.assertEqual(codes(result), ['INVALID_ABSTRACT_SECTION_CHILD'])
        self.assertEqual(result[0].path, 'rfc.front.abstract.artwork')

    def test_xml_reference(self):
        doc = xml_doc(BASE_XML.replace('example protocol.</t>\n    </abstract>',
                                       'example protocol <xref target="RFC2119"/>.</t>\n    </abstract>'))
        result = sections.validate_abstract_section(doc)
        self.assertEqual(codes(result), ['INVALID_ABSTRACT_SECTION_REF'])
        self.assertEqual(result[0].path, 'rfc.front.abstract.t.xref')
        self.assertEqual(sections.validate_abstract_section(doc, Mode.SUBMISSION), [])

    def test_txt_valid(self):
        self.assertEqual(sections.validate_abstract_section(txt_doc()), [])

    def test_txt_missing(self):
        doc = txt_doc(BASE_TXT.replace('Abstract\n\n   This document describes an example protocol.\n\n', ''))
        self.assertEqual(codes(sections.validate_abstract_section(doc)), ['MISSING_ABSTRACT_SECTION'])

    def test_txt_empty(self):
        text = BASE_TXT.replace('   This document describes an example protocol.\n\n', '')
        result = sections.validate_abstract_section(txt_doc(text))
        self.assertEqual(codes(result), ['INVALID_ABSTRACT_SECTION'])
        self.assertEqual(result[0].lines, [LinePos(line_number(text, 'Abstract'), 0)])

    def test_txt_reference(self):
        text = BASE_TXT.replace('an example protocol.', 'an example protocol [RFC9999].')
        result = sections.validate_abstract_section(txt_doc(text))
        self.assertEqual(codes(result), ['INVALID_ABSTRACT_SECTION_REF'])
        self.assertEqual(result[0].lines[0].line, line_number(text, '[RFC9999]'))


class BodySectionTests(TestCase):

    def test_xml_valid(self):
        doc = xml_doc()
        self.assertEqual(sections.validate_introduction_section(doc), [])
        self.assertEqual(sections.validate_security_considerations_section(doc), [])
        self.assertEqual(sections.validate_iana_considerations_section(doc), [])

    def test_xml_missing_introduction(self):
        doc = xml_doc(BASE_XML.replace('<name>Introduction</name>', '<name>Motivation</name>'))
        result = sections.validate_introduction_section(doc)
        self.assertEqual(codes(result), ['MISSING_INTRODUCTION_SECTION'])
        self.assertEqual(result[0].severity, Severity.ERROR)
        self.assertEqual(sections.validate_introduction_section(doc, Mode.FORGIVE_CHECKLIST)[0].severity, Severity.WARNING)
        self.assertEqual(sections.validate_introduction_section(doc, Mode.SUBMISSION), [])

    def test_xml_overview_is_an_introduction(self):
        doc = xml_doc(BASE_XML.replace('<name>Introduction</name>', '<name>Overview</name>'))
        self.assertEqual(sections.validate_introduction_section(doc), [])

    def test_xml_empty_introduction(self):
        doc = xml_doc(BASE_XML.replace(XML_INTRO_TEXT, ''))
        result = sections.validate_introduction_section(doc)
        self.assertEqual(codes(result), ['INVALID_INTRODUCTION_SECTION'])
        self.assertEqual(result[0].path, 'rfc.middle.section[0]')

    def test_xml_invalid_introduction_child(self):
        doc = xml_doc(BASE_XML.replace(XML_INTRO_TEXT, XML_INTRO_TEXT + '<list><t>item</t></list>'))
        result = sections.validate_introduction_section(doc)
        self.assertEqual(codes(result), ['INVALID_INTRODUCTION_SECTION_CHILD'])
        self.assertEqual(result[0].path, 'rfc.middle.section[0].list')

    def test_xml_section_title_attribute(self):
        doc = xml_doc(BASE_XML.replace('<section>\n      <name>Security Considerations</name>',
                                       '<section title="Security Considerations">'))
        self.assertEqual(sections.validate_security_considerations_section(doc), [])

    def test_xml_missing_security_considerations(self):
        doc = xml_doc(BASE_XML.replace('<name>Security Considerations</name>', '<name>Privacy Considerations</name>'))
        self.assertEqual(codes(sections.validate_security_considerations_section(doc)),
                         ['MISSING_SECURITY_CONSIDERATIONS_SECTION'])

    def test_xml_iana_considerations_in_back(self):
        text = BASE_XML.replace('<name>IANA Considerations</name>', '<name>Operations</name>')
        self.assertEqual(codes(sections.validate_iana_considerations_section(xml_doc(text))),
                         ['MISSING_IANA_CONSIDERATIONS_SECTION'])
        text = text.replace('</back>', '<section><name>IANA Considerations</name><t>None.</t></section>\n  </back>')
        self.assertEqual(sections.validate_iana_considerations_section(xml_doc(text)), [])

    def test_xml_missing_iana_considerations_in_rfc(self):
        text = BASE_XML.replace('<name>IANA Considerations</name>', '<name>Operations</name>')
        text = text.replace('name="Internet-Draft" value="draft-ietf-foo-bar-00"', 'name="RFC" value="9999"')
        result = sections.validate_iana_considerations_section(xml_doc(text))
        self.assertEqual(codes(result), ['MISSING_IANA_CONSIDERATIONS_SECTION'])
        self.assertEqual(result[0].severity, Severity.COMMENT)

    def test_txt_valid(self):
        doc = txt_doc()
        self.assertEqual(sections.validate_introduction_section(doc), [])
        self.assertEqual(sections.validate_security_considerations_section(doc), [])
        self.assertEqual(sections.validate_iana_considerations_section(doc), [])

    def test_txt_missing_security_considerations(self):
        doc = txt_doc(BASE_TXT.replace('5.  Security Considerations', '5.  Privacy Considerations'))
        self.assertEqual(codes(sections.validate_security_considerations_section(doc)),
                         ['MISSING_SECURITY_CONSIDERATIONS_SECTION'])

    def test_txt_empty_introduction(self):
        text = BASE_TXT.replace('   The protocol is used between a client and a server.\n\n', '')
        result = sections.validate_introduction_section(txt_doc(text))
        self.assertEqual(codes(result), ['INVALID_INTRODUCTION_SECTION'])
        self.assertEqual(result[0].lines, [LinePos(line_number(text, '1.  Introduction'), 0)])

    def test_txt_page_break_is_not_content(self):
        page_break = '\n'.join([
            'Doe                     Expires 5 December 2024                [Page 1]',
            '\f',
            'Internet-Draft            Example Protocol                    June 2024',
            '',
        ])
        text = BASE_TXT.replace('   The protocol is used between a client and a server.\n\n', page_break + '\n')
        doc = txt_doc(text)
        self.assertEqual(codes(sections.validate_introduction_section(doc)), ['INVALID_INTRODUCTION_SECTION'])
        self.assertNotIn('Example Protocol', [ title for idx, title in sections.txt_headings(doc) ])

    def test_txt_missing_iana_considerations_in_rfc(self):
        text = BASE_TXT.replace('4.  IANA Considerations', '4.  Operations')
        result = sections.validate_iana_considerations_section(txt_doc(text))
        self.assertEqual([ d.severity for d in result ], [Severity.ERROR])
        text = text.replace(header_line('Internet-Draft', 'Example Corp'), header_line('Request for Comments: 9999', 'Example Corp'))
        result = sections.validate_iana_considerations_section(txt_doc(text))
        self.assertEqual([ d.severity for d in result ], [Severity.COMMENT])


class AuthorSectionTests(TestCase):

    author = re.search(r'    <author fullname="Jane Doe".*?</author>\n', BASE_XML, re.S).group(0)

    def test_valid(self):
        self.assertEqual(sections.validate_author_section(xml_doc()), [])
        self.assertEqual(sections.validate_author_section(txt_doc()), [])

    def test_xml_missing(self):
        doc = xml_doc(BASE_XML.replace(self.author, ''))
        self.assertEqual(codes(sections.validate_author_section(doc)), ['MISSING_AUTHOR_SECTION'])

    def test_xml_too_many(self):
        doc = xml_doc(BASE_XML.replace(self.author, self.author * 6))
        result = sections.validate_author_section(doc)
        self.assertEqual(codes(result), ['TOO_MANY_AUTHORS'])
        self.assertEqual(result[0].severity, Severity.COMMENT)

    def test_xml_empty_organization(self):
        doc = xml_doc(BASE_XML.replace('<organization>Example Corp</organization>', '<organization/>'))
        result = sections.validate_author_section(doc)
        self.assertEqual(codes(result), ['EMPTY_AUTHOR_ORGANIZATION'])
        self.assertEqual(result[0].path, 'rfc.front.author.organization')

    def test_xml_missing_fullname(self):
        text = BASE_XML.replace('<author fullname="Jane Doe" initials="J." surname="Doe">', '<author initials="J." surname="Doe">')
        self.assertEqual(sections.validate_author_section(xml_doc(text)), [])
        text = text.replace('<organization>Example Corp</organization>', '')
        self.assertEqual(codes(sections.validate_author_section(xml_doc(text))), ['MISSING_AUTHOR_FULLNAME'])

    def test_xml_ascii_without_fullname(self):
        doc = xml_doc(BASE_XML.replace('<author fullname="Jane Doe" initials="J." surname="Doe">',
                                       '<author asciiFullname="Jane Doe" initials="J." surname="Doe">'))
        self.assertEqual(codes(sections.validate_author_section(doc)), ['MISSING_AUTHOR_FULLNAME_WITH_ASCII'])

    def test_xml_role(self):
        text = BASE_XML.replace('surname="Doe">', 'surname="Doe" role="editor">', 1)
        self.assertEqual(sections.validate_author_section(xml_doc(text)), [])
        text = BASE_XML.replace('surname="Doe">', 'surname="Doe" role="contributor">', 1)
        result = sections.validate_author_section(xml_doc(text))
        self.assertEqual(codes(result), ['INVALID_AUTHOR_ROLE'])
        self.assertEqual(result[0].path, 'rfc.front.author.role')

    def test_xml_paths_of_multiple_authors(self):
        second = self.author.replace('<organization>Example Corp</organization>', '<organization/>')
        doc = xml_doc(BASE_XML.replace(self.author, self.author + second))
        result = sections.validate_author_section(doc)
        self.assertEqual(result[0].path, 'rfc.front.author[1].organization')

    def test_txt_missing(self):
        doc = txt_doc(BASE_TXT.replace("Author's Address", 'Contact'))
        self.assertEqual(codes(sections.validate_author_section(doc)), ['MISSING_AUTHOR_SECTION'])


class ReferencesSectionTests(TestCase):

    def test_xml_invalid_title(self):
        doc = xml_doc(BASE_XML.replace('<name>Normative References</name>', '<name>Cited Works</name>'))
        result = sections.validate_references_section(doc)
        self.assertEqual(codes(result), ['INVALID_REFERENCES_TITLE'])
        self.assertEqual(result[0].path, 'rfc.back.references')

    def test_xml_missing_title(self):
        doc = xml_doc(BASE_XML.replace('<name>Normative References</name>', ''))
        self.assertEqual(codes(sections.validate_references_section(doc)), ['MISSING_REFERENCES_TITLE'])

    def test_xml_nested(self):
        text = BASE_XML.replace('<references>\n      <name>Normative References</name>',
                                '<references>\n      <name>References</name>\n      <references>\n      <name>Normative Refs</name>')
        text = text.replace('</references>', '</references>\n    </references>')
        result = sections.validate_references_section(xml_doc(text))
        self.assertEqual(codes(result), ['INVALID_REFERENCES_TITLE'])
        self.assertEqual(result[0].path, 'rfc.back.references.references')

    def test_xml_title_attribute(self):
        doc = xml_doc(BASE_XML.replace('<references>\n      <name>Normative References</name>',
                                       '<references title="Informative References">'))
        self.assertEqual(sections.validate_references_section(doc), [])

    def test_txt(self):
        self.assertEqual(sections.validate_references_section(txt_doc()), [])
        text = BASE_TXT.replace('6.  Normative References', '6.  Cited References')
        result = sections.validate_references_section(txt_doc(text))
        self.assertEqual(codes(result), ['INVALID_REFERENCES_TITLE'])
        self.assertEqual(result[0].lines, [LinePos(line_number(text, 'Cited References'), 0)])


class FqdnTests(TestCase):

    def test_offline(self):
        doc = txt_doc(BASE_TXT.replace('send a greeting.', 'send a greeting to host.example.zz.'))
        self.assertEqual(fqdn.validate_fqdns(doc), [])

    def test_base_documents(self):
        registry = FakeRegistry()
        self.assertEqual(fqdn.validate_fqdns(xml_doc(), registry=registry), [])
        self.assertEqual(fqdn.validate_fqdns(txt_doc(), registry=registry), [])

    def test_xml_invalid_tld(self):
        doc = xml_doc(BASE_XML.replace('send a greeting.', 'send a greeting to host.example.zz.'))
        result = fqdn.validate_fqdns(doc, registry=FakeRegistry())
        self.assertEqual(codes(result), ['INVALID_DOMAIN_TLD'])
        self.assertEqual(result[0].path, 'rfc.middle.section[2].t.#text')
        self.assertIn('host.example.zz', result[0].message)
        self.assertEqual(result[0].severity, Severity.WARNING)

    def test_txt_invalid_tld(self):
        text = BASE_TXT.replace('send a greeting.', 'send a greeting to host.example.zz.')
        result = fqdn.validate_fqdns(txt_doc(text), registry=FakeRegistry())
        self.assertEqual(codes(result), ['INVALID_DOMAIN_TLD'])
        num = line_number(text, 'host.example.zz')
        self.assertEqual(result[0].lines, [LinePos(num, text.split('\n')[num-1].index('host'))])

    def test_arpa(self):
        text = BASE_TXT.replace('send a greeting.', 'look up 2.0.192.in-addr.arpa and foo.arpa.')
        result = fqdn.validate_fqdns(txt_doc(text), registry=FakeRegistry())
        self.assertEqual(codes(result), ['INVALID_ARPA_DOMAIN'])
        self.assertIn('foo.arpa', result[0].message)

    def test_numbers_are_not_domains(self):
        text = BASE_TXT.replace('send a greeting.', 'follow section 3.14 and 10.0.0.42.')
        self.assertEqual(fqdn.validate_fqdns(txt_doc(text), registry=FakeRegistry()), [])

    def test_submission_mode(self):
        doc = txt_doc(BASE_TXT.replace('send a greeting.', 'send a greeting to host.example.zz.'))
        self.assertEqual(fqdn.validate_fqdns(doc, Mode.SUBMISSION, registry=FakeRegistry()), [])


class IpTests(TestCase):

    def found(self, text):
        return [ (code, match.group(0)) for code, match in ip.find_invalid_ips(text) ]

    def test_valid_addresses(self):
        self.assertEqual(self.found('hosts 192.0.2.1, 10.0.0.0/8, 2001:db8::1, ::1 and 2001:db8::/32.'), [])

    def test_invalid_ipv4(self):
        self.assertEqual(self.found('connect to 192.0.2.256.'), [('INVALID_IPV4_ADDRESS', '192.0.2.256')])
        self.assertEqual(self.found('route 10.0.0.0/33'), [('INVALID_IPV4_ADDRESS', '10.0.0.0/33')])

    def test_invalid_ipv6(self):
        self.assertEqual(self.found('at 2001:db8:0:0:0:0:0:12345 now'), [('INVALID_IPV6_ADDRESS', '2001:db8:0:0:0:0:0:12345')])
        self.assertEqual(self.found('1:2:3:4:5:6:7:8/129'), [('INVALID_IPV6_ADDRESS', '1:2:3:4:5:6:7:8/129')])

    def test_version_numbers_are_not_addresses(self):
        self.assertEqual(self.found('version 1.2.3.4.5 and 1.2.3'), [])

    def test_xml(self):
        doc = xml_doc(BASE_XML.replace(XML_INTRO_TEXT, '<t>Connect to 192.0.2.256.</t>'))
        result = ip.validate_ips(doc)
        self.assertEqual(codes(result), ['INVALID_IPV4_ADDRESS'])
        self.assertEqual(result[0].path, 'rfc.middle.section[0].t')

    def test_txt(self):
        text = BASE_TXT.replace('send a greeting.', 'send a greeting to 192.0.2.300.')
        result = ip.validate_ips(txt_doc(text))
        self.assertEqual(codes(result), ['INVALID_IPV4_ADDRESS'])
        self.assertEqual(result[0].lines[0].line, line_number(text, '192.0.2.300'))
        self.assertEqual(ip.validate_ips(txt_doc(text), Mode.SUBMISSION), [])


class KeywordTests(TestCase):

    def test_base_documents(self):
        self.assertEqual(keywords.validate_2119_keywords(xml_doc()), [])
        self.assertEqual(keywords.validate_2119_keywords(txt_doc()), [])

    def test_invalid_keyword(self):
        text = BASE_TXT.replace('A client MUST send', 'A client MUST not send')
        result = keywords.validate_2119_keywords(txt_doc(text))
        self.assertEqual(codes(result), ['INVALID_REQLEVEL_KEYWORD'])
        self.assertEqual(result[0].lines, [LinePos(line_number(text, 'MUST not'), 12)])
        self.assertEqual(result[0].severity, Severity.COMMENT)

    def test_xml_invalid_keyword(self):
        doc = xml_doc(BASE_XML.replace(XML_INTRO_TEXT, '<t>A server MAY NOT reply.</t>'))
        result = keywords.validate_2119_keywords(doc)
        self.assertEqual(codes(result), ['INVALID_REQLEVEL_KEYWORD'])
        self.assertEqual(result[0].path, 'rfc.middle.section[0].t')
        self.assertIn('MAY NOT', result[0].message)

    def test_quoted_keywords_are_ignored(self):
        self.assertEqual(keywords.find_keywords('the word "MUST" is special'), [])
        self.assertEqual([ m.group(0) for m in keywords.find_keywords('it MUST NOT') ], ['MUST NOT'])

    def test_missing_boilerplate_and_ref(self):
        text = BASE_TXT.replace(TXT_BOILERPLATE, '   This section is left blank.').replace(TXT_2119_REF, TXT_OTHER_REF)
        self.assertEqual(codes(keywords.validate_2119_keywords(txt_doc(text))), ['MISSING_REQLEVEL_BOILERPLATE_AND_REF'])

    def test_missing_boilerplate(self):
        text = BASE_TXT.replace(TXT_BOILERPLATE, '   This section is left blank.')
        self.assertEqual(codes(keywords.validate_2119_keywords(txt_doc(text))), ['MISSING_REQLEVEL_BOILERPLATE'])

    def test_missing_ref(self):
        text = BASE_TXT.replace('BCP 14 [RFC2119] [RFC8174] when', 'BCP 14 when').replace(TXT_2119_REF, TXT_OTHER_REF)
        self.assertEqual(codes(keywords.validate_2119_keywords(txt_doc(text))), ['MISSING_REQLEVEL_REF'])

    def test_citation_without_reference_entry(self):
        text = BASE_TXT.replace(TXT_2119_REF, TXT_OTHER_REF)
        self.assertEqual(codes(keywords.validate_2119_keywords(txt_doc(text))), ['MISSING_REQLEVEL_REF'])
        text = (BASE_XML
            .replace('anchor="RFC2119" target="https://www.rfc-editor.org/info/rfc2119"',
                     'anchor="RFC8174" target="https://www.rfc-editor.org/info/rfc8174"')
            .replace('<seriesInfo name="RFC" value="2119"/>', '<seriesInfo name="RFC" value="8174"/>'))
        self.assertEqual(codes(keywords.validate_2119_keywords(xml_doc(text))), ['MISSING_REQLEVEL_REF'])

    def test_reference_by_entity(self):
        text = with_entities('<!ENTITY RFC2119 SYSTEM "https://bib.ietf.org/public/rfc/bibxml/reference.RFC.2119.xml">')
        text = text[:text.index('<reference anchor="RFC2119"')] + '&RFC2119;\n    </references>' + text[text.index('</references>') + len('</references>'):]
        self.assertEqual(keywords.validate_2119_keywords(xml_doc(text)), [])

    def test_unnecessary_boilerplate(self):
        text = BASE_TXT.replace('A client MUST send a greeting.', 'A client sends a greeting.')
        result = keywords.validate_2119_keywords(txt_doc(text))
        self.assertEqual(codes(result), ['UNNECESSARY_REQLEVEL_BOILERPLATE'])
        self.assertEqual(result[0].severity, Severity.COMMENT)
        doc = xml_doc(BASE_XML.replace(XML_PROTOCOL_TEXT, '<t>A client sends a greeting.</t>'))
        self.assertEqual(codes(keywords.validate_2119_keywords(doc)), ['UNNECESSARY_REQLEVEL_BOILERPLATE'])

    def test_no_keywords_no_boilerplate(self):
        text = BASE_TXT.replace('A client MUST send a greeting.', 'A client sends a greeting.')
        text = text.replace(TXT_BOILERPLATE, '   This section is left blank.')
        self.assertEqual(keywords.validate_2119_keywords(txt_doc(text)), [])

    def test_submission_mode(self):
        text = BASE_TXT.replace(TXT_BOILERPLATE, '   This section is left blank.').replace('MUST send', 'MUST not send')
        self.assertEqual(keywords.validate_2119_keywords(txt_doc(text), Mode.SUBMISSION), [])


class TermsTests(TestCase):

    def test_find_bad_terms(self):
        found = [ (m.group(0), s) for m, s in keywords.find_bad_terms('Send e-mail on-line using IPsec or IPSEC and Diffserv.') ]
        self.assertEqual(found, [
            ('e-mail', 'email (no hyphen)'),
            ('on-line', 'online (no hyphen)'),
            ('IPSEC', 'IPsec'),
        ])

    def test_txt(self):
        text = BASE_TXT.replace('no security considerations.', 'no time-stamp considerations.')
        result = keywords.validate_terms_style(txt_doc(text))
        self.assertEqual(codes(result), ['INCORRECT_TERM_SPELLING'])
        self.assertEqual(result[0].lines[0].line, line_number(text, 'time-stamp'))

    def test_xml(self):
        doc = xml_doc(BASE_XML.replace(XML_INTRO_TEXT, '<t>The sub-domain is used.</t>'))
        result = keywords.validate_terms_style(doc)
        self.assertEqual(codes(result), ['INCORRECT_TERM_SPELLING'])
        self.assertEqual(result[0].path, 'rfc.middle.section[0].t')
        self.assertEqual(keywords.validate_terms_style(doc, Mode.SUBMISSION), [])


class DateTests(TestCase):

    def test_current(self):
        self.assertEqual(metadata.validate_date(xml_doc(), today=TODAY), [])
        self.assertEqual(metadata.validate_date(txt_doc(), today=TODAY), [])
        self.assertEqual(metadata.validate_date(txt_doc(), today=TODAY + datetime.timedelta(days=3)), [])

    def test_past_and_future(self):
        result = metadata.validate_date(xml_doc(), today=TODAY + datetime.timedelta(days=10))
        self.assertEqual(codes(result), ['DOC_DATE_IN_PAST'])
        self.assertEqual(result[0].path, 'rfc.front.date')
        result = metadata.validate_date(txt_doc(), today=TODAY - datetime.timedelta(days=10))
        self.assertEqual(codes(result), ['DOC_DATE_IN_FUTURE'])
        self.assertIn('10 days', result[0].message)

    def test_severity_in_submission(self):
        result = metadata.validate_date(xml_doc(), Mode.SUBMISSION, today=TODAY + datetime.timedelta(days=10))
        self.assertEqual([ d.severity for d in result ], [Severity.WARNING])

    def test_missing(self):
        doc = xml_doc(BASE_XML.replace('<date year="2024" month="June" day="3"/>', ''))
        self.assertEqual(codes(metadata.validate_date(doc, today=TODAY)), ['MISSING_DOC_DATE'])
        text = BASE_TXT.replace(header_line('Intended status: Standards Track', '3 June 2024'),
                                header_line('Intended status: Standards Track'))
        self.assertEqual(codes(metadata.validate_date(txt_doc(text), today=TODAY)), ['MISSING_DOC_DATE'])

    def test_xml_partial_dates(self):
        for date in [ '<date year="2024" month="June"/>', '<date year="2024" month="Jun"/>', '<date year="2024" month="6"/>', '<date year="2024"/>' ]:
            doc = xml_doc(BASE_XML.replace('<date year="2024" month="June" day="3"/>', date))
            self.assertEqual(metadata.validate_date(doc, today=TODAY), [], date)
            self.assertEqual(metadata.validate_date(doc, today=datetime.date(2024, 6, 20)), [], date)

    def test_xml_date(self):
        self.assertEqual(metadata.xml_date({ 'year': '2024', 'month': 'February', }, datetime.date(2024, 3, 31)),
                         datetime.date(2024, 2, 15))
        self.assertEqual(metadata.xml_date({ 'year': '2024', 'month': 'Mar', }, datetime.date(2024, 3, 31)),
                         datetime.date(2024, 3, 31))
        self.assertEqual(metadata.xml_date({ 'month': '6', 'day': '1', }, TODAY), datetime.date(2024, 6, 1))
        self.assertIsNone(metadata.xml_date({ 'year': '2024', 'month': 'Smarch', }, TODAY))
        self.assertIsNone(metadata.xml_date({ 'year': '2024', 'month': '2', 'day': '30', }, TODAY))
        self.assertIsNone(metadata.xml_date({ 'year': 'MMXXIV', 'month': 'June', }, TODAY))
        self.assertIsNone(metadata.xml_date({ 'year': '2023', }, TODAY))

    def test_txt_month_only(self):
        text = BASE_TXT.replace('3 June 2024', 'June 2024')
        self.assertEqual(metadata.validate_date(txt_doc(text), today=datetime.date(2024, 6, 28)), [])
        self.assertEqual(codes(metadata.validate_date(txt_doc(text), today=datetime.date(2024, 7, 15))), ['DOC_DATE_IN_PAST'])


class ObsoletesUpdatesTests(TestCase):

    def test_parse_rfc_list(self):
        self.assertEqual(metadata.parse_rfc_list('1234'), [1234])
        self.assertEqual(metadata.parse_rfc_list('1234, 5678'), [1234, 5678])
        self.assertEqual(metadata.parse_rfc_list('1234 (if approved)'), [1234])
        self.assertIsNone(metadata.parse_rfc_list('RFC 1234'))
        self.assertIsNone(metadata.parse_rfc_list('1234,'))

    def test_none(self):
        self.assertEqual(metadata.validate_obsoletes_updates(xml_doc()), [])
        self.assertEqual(metadata.validate_obsoletes_updates(txt_doc()), [])

    def test_xml(self):
        doc = xml_doc(BASE_XML.replace('category="std"', 'category="std" obsoletes="1234" updates="draft-foo"'))
        result = metadata.validate_obsoletes_updates(doc)
        self.assertEqual(codes(result), ['MISSING_OBSOLETES_REF', 'INVALID_UPDATES_LIST'])
        self.assertEqual(result[0].path, 'rfc.obsoletes')
        self.assertEqual(result[1].path, 'rfc.updates')

    def test_xml_referenced(self):
        text = BASE_XML.replace('category="std"', 'category="std" obsoletes="1234"')
        text = text.replace(XML_INTRO_TEXT, '<t>This document obsoletes RFC 1234.</t>')
        self.assertEqual(metadata.validate_obsoletes_updates(xml_doc(text)), [])

    def test_obsolete_rfc(self):
        text = BASE_XML.replace('category="std"', 'category="std" updates="1234, 2119"')
        text = text.replace(XML_INTRO_TEXT, '<t>This document updates RFC 1234.</t>')
        registry = FakeRegistry(rfcs={ 1234: { 'obsoleted_by': ['RFC5678'], }, 2119: { 'obsoleted_by': [], }, })
        result = metadata.validate_obsoletes_updates(xml_doc(text), registry=registry)
        self.assertEqual(codes(result), ['UPDATES_OBSOLETE_RFC'])
        self.assertIn('RFC5678', result[0].message)

    def test_txt(self):
        text = BASE_TXT.replace(header_line('Expires: 5 December 2024'),
                                header_line('Obsoletes: 1234 (if approved)') + '\n' + header_line('Updates: 2119, 6789') + '\n' +
                                header_line('Expires: 5 December 2024'))
        result = metadata.validate_obsoletes_updates(txt_doc(text))
        self.assertEqual(codes(result), ['MISSING_OBSOLETES_REF', 'MISSING_UPDATES_REF'])
        self.assertIn('6789', result[1].message)
        self.assertEqual(metadata.validate_obsoletes_updates(txt_doc(text), Mode.SUBMISSION), [])


class XmlRuleTests(TestCase):

    def test_deprecated_elements(self):
        self.assertEqual(xml.detect_deprecated_elements(xml_doc()), [])
        doc = xml_doc(BASE_XML.replace(XML_INTRO_TEXT, '<t>The <spanx>protocol</spanx> is <xref target="RFC2119" format="default"/>.</t>'))
        result = xml.detect_deprecated_elements(doc)
        self.assertEqual(codes(result), ['DEPRECATED_ELEMENT'])
        self.assertEqual(result[0].path, 'rfc.middle.section[0].t.spanx')

    def test_code_begins(self):
        self.assertEqual(xml.validate_code_blocks(xml_doc()), [])
        doc = xml_doc(BASE_XML.replace(XML_INTRO_TEXT, '<t>&lt;CODE BEGINS&gt; int x; &lt;CODE ENDS&gt;</t>'))
        self.assertEqual(codes(xml.validate_code_blocks(doc)), ['MISSING_SOURCECODE_TAG'])
        doc = xml_doc(BASE_XML.replace(XML_INTRO_TEXT, XML_INTRO_TEXT + '<sourcecode>&lt;CODE BEGINS&gt;\nint x;\n&lt;CODE ENDS&gt;</sourcecode>'))
        result = xml.validate_code_blocks(doc)
        self.assertEqual(codes(result), ['UNNECESSARY_CODE_BEGINS'])
        self.assertEqual(result[0].path, 'rfc.middle.section[0].sourcecode')

    def test_text_like_refs(self):
        self.assertEqual(xml.validate_text_like_refs(xml_doc()), [])
        doc = xml_doc(BASE_XML.replace(XML_INTRO_TEXT, '<t>See [RFC2119], [3] and [I-D.ietf-foo-baz].</t>'))
        result = xml.validate_text_like_refs(doc)
        self.assertEqual(codes(result), ['TEXT_DOC_REF'] * 3)
        self.assertEqual(xml.validate_text_like_refs(doc, Mode.SUBMISSION), [])

    def test_ipr(self):
        self.assertEqual(xml.validate_ipr_attribute(xml_doc()), [])
        doc = xml_doc(BASE_XML.replace(' ipr="trust200902"', ''))
        self.assertEqual(codes(xml.validate_ipr_attribute(doc)), ['MISSING_IPR_ATTRIBUTE'])
        doc = xml_doc(BASE_XML.replace('ipr="trust200902"', 'ipr="full3978"'))
        self.assertEqual(codes(xml.validate_ipr_attribute(doc)), ['INVALID_IPR_VALUE'])
        doc = xml_doc(BASE_XML.replace('ipr="trust200902"', 'ipr="noModificationTrust200902"'))
        self.assertEqual(codes(xml.validate_ipr_attribute(doc)), ['FORBIDDEN_IPR_VALUE_FOR_STREAM'])
        doc = xml_doc(BASE_XML.replace('ipr="trust200902"', 'ipr="noDerivativesTrust200902"').replace('submissionType="IETF"', 'submissionType="independent"'))
        self.assertEqual(xml.validate_ipr_attribute(doc), [])

    def test_submission_type(self):
        self.assertEqual(xml.validate_submission_type(xml_doc()), [])
        doc = xml_doc(BASE_XML.replace(' submissionType="IETF"', ''))
        self.assertEqual(xml.get_submission_type(doc), 'IETF')
        doc = xml_doc(BASE_XML.replace('submissionType="IETF"', 'submissionType="Vendor"'))
        self.assertEqual(codes(xml.validate_submission_type(doc)), ['SUBMISSION_TYPE_INVALID'])

    def test_submission_type_mismatch(self):
        text = BASE_XML.replace('submissionType="IETF"', 'submissionType="IAB"')
        self.assertEqual(codes(xml.validate_submission_type(xml_doc(text))), ['SUBMISSION_TYPE_MISMATCH'])
        self.assertEqual(xml.validate_submission_type(xml_doc(text, 'draft-iab-foo-bar-00.xml')), [])
        text = BASE_XML.replace('submissionType="IETF"', 'submissionType="independent"')
        self.assertEqual(xml.validate_submission_type(xml_doc(text, 'draft-doe-foo-bar-00.xml')), [])

    def test_submission_type_against_datatracker(self):
        ietf = FakeRegistry(docs={ 'draft-ietf-foo-bar-00': { 'stream': '/api/v1/name/streamname/ietf/', }, })
        iab = FakeRegistry(docs={ 'draft-ietf-foo-bar-00': { 'stream': '/api/v1/name/streamname/iab/', }, })
        self.assertEqual(xml.validate_submission_type(xml_doc(), registry=ietf), [])
        self.assertEqual(xml.validate_submission_type(xml_doc(), registry=FakeRegistry()), [])
        result = xml.validate_submission_type(xml_doc(), registry=iab)
        self.assertEqual(codes(result), ['SUBMISSION_TYPE_UNEXPECTED'])
        self.assertIn('(iab)', result[0].message)

    def test_independent_stream_in_datatracker(self):
        text = BASE_XML.replace('submissionType="IETF"', 'submissionType="independent"').replace('draft-ietf-', 'draft-doe-')
        ise = FakeRegistry(docs={ 'draft-doe-foo-bar-00': { 'stream': '/api/v1/name/streamname/ise/', }, })
        self.assertEqual(xml.validate_submission_type(xml_doc(text, 'draft-doe-foo-bar-00.xml'), registry=ise), [])

    def test_external_entities(self):
        doc = xml_doc(with_entities(
            '<!ENTITY RFC2119 SYSTEM "https://bib.ietf.org/public/rfc/bibxml/reference.RFC.2119.xml">',
            '<!ENTITY local SYSTEM "refs/local.xml">',
            '<!ENTITY other SYSTEM "https://example.com/ref.xml">',
            '<!ENTITY public PUBLIC "-//Example//Reference//EN" "http://www.example.net/public.xml">',
        ))
        result = xml.validate_external_entities(doc)
        self.assertEqual(codes(result), ['EXTERNAL_ENTITY_DOMAIN_NOT_ALLOWED'] * 2)
        self.assertIn('example.com', result[0].message)
        self.assertIn('www.example.net', result[1].message)
        self.assertEqual(result[0].severity, Severity.WARNING)
        result = xml.validate_external_entities(doc, allowed_domains=['example.com', 'www.example.net'])
        self.assertEqual(result, [])
