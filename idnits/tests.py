# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

import datetime
import io
import json
import os
import sys
import tempfile

from unittest import TestCase, mock

from idnits.checker import Checker, check_nits
from idnits.diagnostics import Severity
from idnits.document import Document
from idnits.modes import Mode, severity_for
from idnits.remote import RegistryCache
from idnits.run import main
from idnits.test_utils import BASE_TXT, BASE_XML, TODAY, TXT_FILENAME, XML_FILENAME, FakeRegistry, codes


# A draft with a little of everything wrong with it
FLAWED_TXT = (BASE_TXT
    .replace('Abstract\n\n   This document describes an example protocol.\n\n', '')
    .replace('A client MUST send a greeting.', 'A client MUST not send a greeting to 192.0.2.256.')
    .replace('There are no security considerations.', 'There are no e-mail considerations.')
    + '   ' + 'x' * 80 + '\n')


class CheckerTests(TestCase):

    def check(self, raw, filename, **kwargs):
        kwargs.setdefault('offline', True)
        kwargs.setdefault('today', TODAY)
        return check_nits(raw, filename, **kwargs)

    def test_clean_documents(self):
        for mode in Mode.ALL:
            self.assertEqual(self.check(BASE_XML.encode('utf-8'), XML_FILENAME, mode=mode), [])
            self.assertEqual(self.check(BASE_TXT.encode('utf-8'), TXT_FILENAME, mode=mode), [])

    def test_text_input(self):
        self.assertEqual(self.check(BASE_TXT, TXT_FILENAME), [])

    def test_flawed_document(self):
        result = self.check(FLAWED_TXT, TXT_FILENAME)
        self.assertEqual(codes(result), [
            'MISSING_ABSTRACT_SECTION',
            'INVALID_IPV4_ADDRESS',
            'INVALID_REQLEVEL_KEYWORD',
            'INCORRECT_TERM_SPELLING',
            'LINE_TOO_LONG',
        ])

    def test_deterministic(self):
        self.assertEqual(self.check(FLAWED_TXT, TXT_FILENAME), self.check(FLAWED_TXT, TXT_FILENAME))

    def test_modes_are_consistent(self):
        normal = self.check(FLAWED_TXT, TXT_FILENAME, mode=Mode.NORMAL)
        for mode in Mode.ALL:
            result = self.check(FLAWED_TXT, TXT_FILENAME, mode=mode)
            self.assertTrue(set(codes(result)) <= set(codes(normal)))
            for d in result:
                self.assertEqual(d.severity, severity_for(d.code, mode, Document.DOC_KIND_DRAFT))
        self.assertEqual(codes(self.check(FLAWED_TXT, TXT_FILENAME, mode=Mode.SUBMISSION)), ['MISSING_ABSTRACT_SECTION', 'LINE_TOO_LONG'])

    def test_progress_report(self):
        messages = []
        self.check(BASE_XML, XML_FILENAME, progress_report=messages.append)
        expected = [
            'Validating filename...',
            'Validating encoding...',
            'Decoding document to UTF-8...',
            'Validating text...',
            'Parsing XML document...',
        ] + [ s.msg for s in Checker.stages if s.fmt in ('any', 'xml') ]
        self.assertEqual(messages, expected)
        self.assertIn('Validating external entities...', messages)
        self.assertNotIn('Validating line length...', messages)

    def test_parse_failure_ends_the_run(self):
        raw = '<rfc>café\n<front>\n</rfc>\n'.encode('utf-8')
        messages = []
        result = self.check(raw, 'Draft-foo.xml', progress_report=messages.append)
        self.assertEqual(result[-1].code, 'XML_PARSING_FAILED')
        self.assertEqual(result[-1].severity, Severity.ERROR)
        self.assertIn('FILENAME_INVALID_CHARS', codes(result))
        self.assertIn('NON_ASCII_UTF8', codes(result))
        self.assertEqual(messages[-1], 'Parsing XML document...')

    def test_v2_doctype_entities(self):
        text = (BASE_XML
            .replace('<rfc ', '<!DOCTYPE rfc SYSTEM "rfc2629.dtd">\n<rfc ', 1)
            .replace('<bcp14>MUST</bcp14> send', '<bcp14>MUST</bcp14>&nbsp;send'))
        self.assertEqual(self.check(text, XML_FILENAME), [])

    def test_txt_parse_failure(self):
        result = self.check(BASE_TXT.replace('3 June 2024', '31 June 2024'), TXT_FILENAME)
        self.assertEqual(codes(result), ['TXT_PARSING_FAILED'])

    def test_binary_input(self):
        result = self.check(b'%PDF-1.4\n1 0 obj\n', 'draft-ietf-foo-bar-00.txt')
        self.assertEqual(codes(result), ['ENCODING_DETECTION_FAILED'])
        jpeg = b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        result = self.check(jpeg, 'draft-ietf-foo-bar-00.txt')
        self.assertEqual(codes(result), ['INVALID_ENCODING', 'ENCODING_DETECTION_FAILED'])

    def test_utf16_input(self):
        result = self.check(BASE_TXT.encode('utf-16'), TXT_FILENAME)
        self.assertEqual(codes(result), ['INVALID_ENCODING'])

    def test_invalid_mode(self):
        with self.assertRaises(ValueError):
            Checker(mode='strict')
        with self.assertRaises(ValueError):
            self.check(BASE_TXT, TXT_FILENAME, mode='strict')

    def test_registry(self):
        self.assertIsNone(Checker(offline=True).registry)
        cache = RegistryCache()
        self.assertIs(Checker(cache=cache).registry.cache, cache)

    def test_close(self):
        with mock.patch('idnits.remote.RemoteRegistry.close') as close:
            with Checker(cache=RegistryCache()) as checker:
                self.assertIsNotNone(checker.registry)
            close.assert_called_once_with()
            with mock.patch.object(Checker, 'check', return_value=[]):
                self.assertEqual(check_nits(BASE_TXT, TXT_FILENAME), [])
            self.assertEqual(close.call_count, 2)
        with Checker(offline=True) as checker:
            self.assertIsNone(checker.registry)

    def test_remote_checks(self):
        checker = Checker(today=TODAY)
        checker.registry = FakeRegistry(docs={ 'draft-ietf-foo-bar-00': { 'stream': '/api/v1/name/streamname/irtf/', }, })
        text = BASE_XML.replace('send a greeting.', 'send a greeting to host.example.zz.')
        self.assertEqual(codes(checker.check(text, XML_FILENAME)), ['INVALID_DOMAIN_TLD', 'SUBMISSION_TYPE_UNEXPECTED'])

    def test_rule_errors_propagate(self):
        with mock.patch('idnits.rules.ip.validate_ips', side_effect=RuntimeError('boom')):
            with self.assertRaises(RuntimeError):
                self.check(BASE_TXT, TXT_FILENAME)

    def test_today_defaults_to_the_current_date(self):
        result = check_nits(BASE_TXT, TXT_FILENAME, offline=True)
        self.assertEqual(codes(result), ['DOC_DATE_IN_PAST'] if datetime.date.today() > TODAY + datetime.timedelta(days=3) else [])


class CommandLineTests(TestCase):

    def run_main(self, *args, **files):
        "Run the command line tool on the given files.  Returns (exit status, stdout)"
        with tempfile.TemporaryDirectory() as tmpdir:
            paths = []
            for name, content in files.items():
                path = os.path.join(tmpdir, name.replace('_', '-'))
                with io.open(path, 'w', encoding='utf-8') as file:
                    file.write(content)
                paths.append(path)
            stdout = io.StringIO()
            with mock.patch.object(sys, 'argv', ['idnits', '--offline'] + list(args) + paths), \
                 mock.patch.object(sys, 'stdout', stdout), \
                 mock.patch.object(sys, 'stderr', io.StringIO()):
                with self.assertRaises(SystemExit) as cm:
                    main()
            return cm.exception.code, stdout.getvalue()

    def test_json(self):
        status, output = self.run_main('-o', 'json', **{ 'draft_ietf_foo_bar_00.txt': FLAWED_TXT })
        self.assertEqual(status, 1)
        results = json.loads(output)
        self.assertEqual(len(results), 1)
        items = list(results.values())[0]
        found = [ item['code'] for item in items ]
        self.assertIn('MISSING_ABSTRACT_SECTION', found)
        self.assertIn('LINE_TOO_LONG', found)
        item = items[found.index('LINE_TOO_LONG')]
        self.assertEqual(item['severity'], 'error')
        self.assertEqual(len(item['lines']), 1)

    def test_filter(self):
        status, output = self.run_main('-o', 'json', '-f', 'comments', **{ 'draft_ietf_foo_bar_00.txt': FLAWED_TXT })
        self.assertEqual(status, 1)
        items = list(json.loads(output).values())[0]
        self.assertEqual(set( item['severity'] for item in items ), set(['comment']))

    def test_count(self):
        status, output = self.run_main('-o', 'count', '-m', 'submission', **{ 'draft_ietf_foo_bar_00.txt': BASE_TXT })
        self.assertEqual(status, 0)
        self.assertEqual(output.split(': ', 1)[1].split(' ')[0], 'error=0')

    def test_pretty(self):
        status, output = self.run_main('-v', **{ 'draft_ietf_foo_bar_00.txt': FLAWED_TXT })
        self.assertEqual(status, 1)
        self.assertIn('Inspecting file', output)
        self.assertIn('[LINE_TOO_LONG]', output)
        self.assertIn('draft-ietf-foo-bar-00.txt(', output)
        self.assertIn('\nFound ', output)

    def test_invalid_mode(self):
        status, output = self.run_main('-m', 'strict')
        self.assertEqual(status, 1)
