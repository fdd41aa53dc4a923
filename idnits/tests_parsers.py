# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

import datetime

from unittest import TestCase

from idnits.diagnostics import ParseError, Severity
from idnits.document import Document
from idnits.parsers import get_doc_type, parse
from idnits.parsers.txt import parse_date, split_columns
from idnits.parsers.xml import escape_undefined_entities, extract_external_entities, tree_from_text
from idnits.test_utils import BASE_TXT, BASE_XML, TXT_FILENAME, XML_FILENAME, header_line, line_number, txt_doc, xml_doc


class XmlParserTests(TestCase):

    def test_base_document(self):
        doc = xml_doc()
        self.assertEqual(doc.type, 'xml')
        self.assertEqual(doc.version, 3)
        self.assertEqual(doc.version_certainty, Document.CERTAINTY_STRICT)
        self.assertEqual(doc.doc_kind, Document.DOC_KIND_DRAFT)
        self.assertEqual(doc.doc_kind_certainty, Document.CERTAINTY_STRICT)
        self.assertEqual(doc.data['rfc']['front']['title'], 'An Example Protocol')
        self.assertEqual(doc.get_docname(), 'draft-ietf-foo-bar-00')
        self.assertEqual(doc.external_entities, [])

    def test_tree_shape(self):
        data = tree_from_text('<a><b>1</b><b>2</b><c/><d x="1">t<e/>u</d><!-- note --></a>')
        self.assertEqual(data, {
            'a': {
                'b': ['1', '2'],
                'c': '',
                'd': { '_attr': { 'x': '1', }, '#text': 't u', 'e': '', },
            },
        })

    def test_namespaced_attributes(self):
        data = tree_from_text('<a xmlns:xi="http://www.w3.org/2001/XInclude" xml:lang="en"><xi:include href="r.xml"/></a>')
        self.assertEqual(data['a']['_attr'], { 'xml:lang': 'en', })
        self.assertEqual(data['a']['xi:include'], { '_attr': { 'href': 'r.xml', }, })

    def test_external_entities(self):
        text = BASE_XML.replace('<rfc ', '<!DOCTYPE rfc [\n'
                                '<!ENTITY RFC8174 SYSTEM "https://bib.ietf.org/public/rfc/bibxml/reference.RFC.8174.xml">\n'
                                '<!ENTITY nbsp "&#160;">\n'
                                ']>\n<rfc ', 1)
        text = text.replace('</references>', '&RFC8174;\n    </references>')
        doc = xml_doc(text)
        self.assertEqual(len(doc.external_entities), 1)
        entity = doc.external_entities[0]
        self.assertEqual(entity.name, 'RFC8174')
        self.assertEqual(entity.type, 'SYSTEM')
        self.assertEqual(entity.url, 'https://bib.ietf.org/public/rfc/bibxml/reference.RFC.8174.xml')
        self.assertTrue(entity.original.startswith('<!ENTITY RFC8174 SYSTEM'))
        # the reference survives as literal text
        self.assertEqual(doc.data['rfc']['back']['references']['#text'], '&RFC8174;')

    def test_extract_external_entities(self):
        text, entities = extract_external_entities('<!ENTITY a SYSTEM "http://example.com/a.xml">\n<x>&a; &b;</x>')
        self.assertEqual([ e.name for e in entities ], ['a'])
        self.assertEqual(text, '\n<x>&amp;a; &b;</x>')

    def test_version_guessed_from_series_info(self):
        doc = xml_doc(BASE_XML.replace(' version="3"', ''))
        self.assertEqual(doc.version, 3)
        self.assertEqual(doc.version_certainty, Document.CERTAINTY_GUESS)

    def test_version_guessed_as_2(self):
        text = BASE_XML.replace(' version="3"', '').replace('<seriesInfo name="Internet-Draft" value="draft-ietf-foo-bar-00"/>', '')
        doc = xml_doc(text)
        self.assertEqual(doc.version, 2)
        self.assertEqual(doc.version_certainty, Document.CERTAINTY_GUESS)
        self.assertEqual(doc.doc_kind, Document.DOC_KIND_DRAFT)
        self.assertEqual(doc.doc_kind_certainty, Document.CERTAINTY_GUESS)

    def test_unsupported_version(self):
        for version in ['1', '4', 'three']:
            with self.assertRaises(ParseError) as cm:
                xml_doc(BASE_XML.replace('version="3"', 'version="%s"' % version))
            self.assertEqual(cm.exception.diagnostic.code, 'XML_UNSUPPORTED_VERSION')
            self.assertEqual(cm.exception.diagnostic.severity, Severity.ERROR)

    def test_decimal_version(self):
        doc = xml_doc(BASE_XML.replace('version="3"', 'version="3.0"'))
        self.assertEqual(doc.version, 3)
        self.assertEqual(doc.version_certainty, Document.CERTAINTY_STRICT)

    def test_entities_from_external_dtd(self):
        text = (BASE_XML
            .replace('<rfc ', '<!DOCTYPE rfc SYSTEM "rfc2629.dtd">\n<rfc ', 1)
            .replace('<bcp14>MUST</bcp14> send', '<bcp14>MUST</bcp14>&nbsp;send'))
        doc = xml_doc(text)
        self.assertEqual(doc.data['rfc']['middle']['section'][2]['t']['#text'], 'A client &nbsp;send a greeting.')
        self.assertEqual(doc.external_entities, [])

    def test_escape_undefined_entities(self):
        text = '<!DOCTYPE x [\n<!ENTITY a "A">\n]>\n<x>&a; &b; &amp; &lt; &#160;</x>'
        self.assertEqual(escape_undefined_entities(text),
                         '<!DOCTYPE x [\n<!ENTITY a "A">\n]>\n<x>&a; &amp;b; &amp; &lt; &#160;</x>')

    def test_rfc_kind(self):
        doc = xml_doc(BASE_XML.replace('name="Internet-Draft" value="draft-ietf-foo-bar-00"', 'name="RFC" value="9999"'))
        self.assertEqual(doc.doc_kind, Document.DOC_KIND_RFC)
        self.assertEqual(doc.doc_kind_certainty, Document.CERTAINTY_STRICT)

    def test_unsupported_kind(self):
        with self.assertRaises(ParseError) as cm:
            xml_doc(BASE_XML.replace('name="Internet-Draft"', 'name="STD"'))
        self.assertEqual(cm.exception.diagnostic.code, 'XML_UNSUPPORTED_DOC_KIND')

    def test_kind_from_filename(self):
        text = BASE_XML.replace('<seriesInfo name="Internet-Draft" value="draft-ietf-foo-bar-00"/>', '')
        doc = xml_doc(text, 'rfc-9999.xml')
        self.assertEqual(doc.doc_kind, Document.DOC_KIND_RFC)
        self.assertEqual(doc.doc_kind_certainty, Document.CERTAINTY_GUESS)
        with self.assertRaises(ParseError) as cm:
            xml_doc(text, 'example.xml')
        self.assertEqual(cm.exception.diagnostic.code, 'XML_UNRECOGNIZED_DOC_KIND')

    def test_malformed(self):
        with self.assertRaises(ParseError) as cm:
            xml_doc('<rfc>\n<front>\n</rfc>\n')
        d = cm.exception.diagnostic
        self.assertEqual(d.code, 'XML_PARSING_FAILED')
        self.assertEqual(d.severity, Severity.ERROR)
        self.assertTrue(d.lines[0].line >= 1)


class TxtParserTests(TestCase):

    def test_base_document(self):
        doc = txt_doc()
        self.assertEqual(doc.type, 'txt')
        self.assertEqual(doc.page_count, 1)
        self.assertEqual(doc.header.source, 'Network Working Group')
        self.assertEqual(doc.header.authors, [ dict(name='J. Doe', org='Example Corp'), ])
        self.assertEqual(doc.header.date, datetime.date(2024, 6, 3))
        self.assertEqual(doc.header.expires, datetime.date(2024, 12, 5))
        self.assertEqual(doc.header.intended_status, 'Standards Track')
        self.assertEqual(doc.title, 'An Example Protocol')
        self.assertEqual(doc.slug, 'draft-ietf-foo-bar-00')
        self.assertEqual(doc.get_docname(), 'draft-ietf-foo-bar-00')
        self.assertEqual(doc.doc_kind, Document.DOC_KIND_DRAFT)
        self.assertEqual(doc.doc_kind_certainty, Document.CERTAINTY_STRICT)
        self.assertEqual(doc.markers['header'], [4, 7])
        self.assertEqual(doc.markers['title'], 10)
        self.assertEqual(doc.markers['slug'], 11)

    def test_form_feeds_count_pages(self):
        text = BASE_TXT.replace('\n1.  Introduction', '\n\f\n1.  Introduction').replace('\n4.  IANA', '\n\f\n4.  IANA')
        self.assertEqual(txt_doc(text).page_count, 3)

    def test_rfc_header(self):
        text = BASE_TXT.replace(header_line('Internet-Draft', 'Example Corp'), header_line('Request for Comments: 9999', 'Example Corp'))
        text = text.replace('Intended status: Standards Track', 'Category: Standards Track       ')
        text = text.replace(header_line('Expires: 5 December 2024'), header_line('ISSN: 2070-1721'))
        doc = txt_doc(text)
        self.assertEqual(doc.doc_kind, Document.DOC_KIND_RFC)
        self.assertEqual(doc.doc_kind_certainty, Document.CERTAINTY_STRICT)
        self.assertEqual(doc.header.rfc_number, 9999)
        self.assertEqual(doc.header.category, 'Standards Track')
        self.assertEqual(doc.header.issn, '2070-1721')

    def test_obsoletes_and_updates(self):
        text = BASE_TXT.replace(header_line('Expires: 5 December 2024'),
                                header_line('Obsoletes: 1234 (if approved)') + '\n' + header_line('Updates: 5678, 6789') + '\n' + header_line('Expires: 5 December 2024'))
        doc = txt_doc(text)
        self.assertEqual(doc.header.obsoletes, '1234 (if approved)')
        self.assertEqual(doc.header.updates, '5678, 6789')

    def test_multiple_authors(self):
        text = BASE_TXT.replace(header_line('Intended status: Standards Track', '3 June 2024'),
                                header_line('Intended status: Standards Track', 'R. Roe') + '\n' +
                                header_line('', 'Example University') + '\n' +
                                header_line('', '3 June 2024'))
        doc = txt_doc(text)
        self.assertEqual(doc.header.authors, [
            dict(name='J. Doe', org='Example Corp'),
            dict(name='R. Roe', org='Example University'),
        ])
        self.assertEqual(doc.header.date, datetime.date(2024, 6, 3))

    def test_no_kind_label(self):
        doc = txt_doc(BASE_TXT.replace(header_line('Internet-Draft', 'Example Corp'), header_line('', 'Example Corp')))
        self.assertIsNone(doc.doc_kind)
        self.assertIsNone(doc.doc_kind_certainty)

    def test_title_continuation(self):
        text = BASE_TXT.replace('                          An Example Protocol',
                                '                          An Example Protocol\n'
                                '                            for Testing')
        doc = txt_doc(text)
        self.assertEqual(doc.title, 'An Example Protocol for Testing')
        self.assertEqual(doc.slug, 'draft-ietf-foo-bar-00')

    def test_bad_date_is_fatal(self):
        text = BASE_TXT.replace('3 June 2024', '31 June 2024')
        with self.assertRaises(ParseError) as cm:
            txt_doc(text)
        d = cm.exception.diagnostic
        self.assertEqual(d.code, 'TXT_PARSING_FAILED')
        self.assertEqual(d.lines[0].line, line_number(text, '31 June 2024'))

    def test_split_columns(self):
        self.assertEqual(split_columns('Network Working Group     J. Doe'), ('Network Working Group', 'J. Doe'))
        self.assertEqual(split_columns('                    June 2024'), ('', 'June 2024'))
        self.assertEqual(split_columns('Internet-Draft'), ('Internet-Draft', ''))
        self.assertEqual(split_columns('   '), ('', ''))

    def test_parse_date(self):
        self.assertEqual(parse_date('June 2024'), datetime.date(2024, 6, 1))
        self.assertEqual(parse_date('3 June 2024'), datetime.date(2024, 6, 3))
        self.assertEqual(parse_date('June 3, 2024'), datetime.date(2024, 6, 3))
        self.assertEqual(parse_date('Dec 2024'), datetime.date(2024, 12, 1))
        self.assertIsNone(parse_date('Example Corp'))
        self.assertIsNone(parse_date('Acme 2024'))
        with self.assertRaises(ValueError):
            parse_date('30 February 2024')


class DispatchTests(TestCase):

    def test_doc_type(self):
        self.assertEqual(get_doc_type(XML_FILENAME), 'xml')
        self.assertEqual(get_doc_type(TXT_FILENAME), 'txt')
        self.assertEqual(get_doc_type('draft-foo'), 'txt')

    def test_parse(self):
        self.assertEqual(parse(BASE_XML, XML_FILENAME).type, 'xml')
        self.assertEqual(parse(BASE_TXT, TXT_FILENAME).type, 'txt')
