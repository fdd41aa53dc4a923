# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

from unittest import TestCase

from idnits.traversal import (as_list, find_all_descendants, find_descendant, get_path, has_path, node_text,
                              path_segment_name, visit_all, visit_leaves)


class FindDescendantTests(TestCase):

    tree = {
        'a': { 'x': 'one', },
        'b': [ { 'x': 'two', }, { 'y': { 'x': 'three', }, }, ],
    }

    def test_first_match_in_document_order(self):
        match = find_descendant(self.tree, lambda v, k: k == 'x')
        self.assertEqual(match.path, ['a', 'x'])
        self.assertEqual(match.key, 'x')
        self.assertEqual(match.value, 'one')

    def test_list_entries_are_indexed(self):
        match = find_descendant({ 'b': self.tree['b'] }, lambda v, k: v == 'three')
        self.assertEqual(match.path, ['b[1]', 'y', 'x'])

    def test_no_match(self):
        self.assertIsNone(find_descendant(self.tree, lambda v, k: k == 'nothing'))

    def test_find_all_in_order(self):
        matches = find_all_descendants(self.tree, lambda v, k: k == 'x')
        self.assertEqual([ m.value for m in matches ], ['one', 'two', 'three'])
        self.assertEqual([ m.path for m in matches ], [['a', 'x'], ['b[0]', 'x'], ['b[1]', 'y', 'x']])

    def test_match_does_not_prune(self):
        tree = { 'x': { 'x': 'inner', }, }
        matches = find_all_descendants(tree, lambda v, k: k == 'x')
        self.assertEqual([ m.path for m in matches ], [['x'], ['x', 'x']])

    def test_predicate_errors_propagate(self):
        def pred(value, key):
            raise RuntimeError('boom')
        with self.assertRaises(RuntimeError):
            find_descendant(self.tree, pred)


class VisitTests(TestCase):

    tree = {
        't': [
            { '_attr': { 'anchor': 'p1', }, '#text': 'hello', },
            'world',
        ],
    }

    def test_visit_leaves_skips_attributes(self):
        visited = []
        visit_leaves(self.tree, lambda v, k, p: visited.append((v, k, p)))
        self.assertEqual(visited, [
            ('hello', '#text', ['t[0]', '#text']),
            ('world', 't', ['t[1]']),
        ])

    def test_visit_all_includes_attributes(self):
        keys = []
        visit_all(self.tree, lambda v, k, p: keys.append(k))
        self.assertIn('_attr', keys)
        self.assertIn('anchor', keys)
        self.assertIn('#text', keys)

    def test_visit_all_reports_paths(self):
        paths = []
        visit_all(self.tree, lambda v, k, p: paths.append('.'.join(p)))
        self.assertEqual(paths, ['t[0]', 't[0]._attr', 't[0]._attr.anchor', 't[0].#text', 't[1]'])


class HelperTests(TestCase):

    def test_get_path(self):
        tree = { 'rfc': { '_attr': { 'version': '3', }, 'front': '', }, }
        self.assertEqual(get_path(tree, 'rfc._attr.version'), '3')
        self.assertEqual(get_path(tree, 'rfc.front'), '')
        self.assertIsNone(get_path(tree, 'rfc.front.title'))
        self.assertEqual(get_path(tree, 'rfc.middle', 'default'), 'default')
        self.assertTrue(has_path(tree, 'rfc.front'))
        self.assertFalse(has_path(tree, 'rfc.back'))

    def test_as_list(self):
        self.assertEqual(as_list(None), [])
        self.assertEqual(as_list('a'), ['a'])
        self.assertEqual(as_list(['a', 'b']), ['a', 'b'])

    def test_node_text(self):
        self.assertEqual(node_text('plain'), 'plain')
        self.assertEqual(node_text({ '#text': 'mixed', 'xref': '', }), 'mixed')
        self.assertEqual(node_text({ 'xref': '', }), '')

    def test_path_segment_name(self):
        self.assertEqual(path_segment_name('section[3]'), 'section')
        self.assertEqual(path_segment_name('section'), 'section')
