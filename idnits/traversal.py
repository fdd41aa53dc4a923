# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
Search and visitation over the generic document tree.

A node is a string (leaf), a list of nodes, or a dict mapping keys to nodes,
with insertion order being document order.  Element attributes live in a dict
under the ATTR_KEY bucket, and text interleaved with child elements under
TEXT_KEY.  Paths are lists of keys; a list entry contributes the segment
'key[index]'.
"""

from collections import namedtuple
from typing import Any, Callable, Dict, List, Optional, Union   # pyflakes:ignore

Node = Union[str, List['Node'], Dict[str, 'Node']]

ATTR_KEY = '_attr'
TEXT_KEY = '#text'

TraversalMatch = namedtuple('TraversalMatch', ['path', 'key', 'value'])


def _walk(obj, func, path, matches, first):
    for key, value in obj.items():
        if func(value, key):
            matches.append(TraversalMatch(path + [key], key, value))
            if first:
                return True
        if isinstance(value, list):
            for idx, entry in enumerate(value):
                if isinstance(entry, dict):
                    if _walk(entry, func, path + ['%s[%d]' % (key, idx)], matches, first):
                        return True
        elif isinstance(value, dict):
            if _walk(value, func, path + [key], matches, first):
                return True
    return False

def find_descendant(root: Dict[str, Node], func: Callable[[Node, str], bool]) -> Optional[TraversalMatch]:
    """Find the first entry anywhere in the tree for which func(value, key) is true

    Entries are tried depth-first in document order.  Returns a
    TraversalMatch, or None if nothing matched.
    """
    matches = []            # type: List[TraversalMatch]
    _walk(root, func, [], matches, first=True)
    return matches[0] if matches else None

def find_all_descendants(root: Dict[str, Node], func: Callable[[Node, str], bool]) -> List[TraversalMatch]:
    """Find all entries for which func(value, key) is true, in document order

    A match does not stop the descent into the matched value; matches nested
    inside it are returned as well.
    """
    matches = []            # type: List[TraversalMatch]
    _walk(root, func, [], matches, first=False)
    return matches


def _visit(value, key, path, visit, leaves_only):
    if isinstance(value, list):
        for idx, entry in enumerate(value):
            _visit(entry, key, path[:-1] + ['%s[%d]' % (key, idx)], visit, leaves_only)
    else:
        if isinstance(value, dict):
            if leaves_only and key == ATTR_KEY:
                return
            if not leaves_only:
                visit(value, key, path)
            for k, v in value.items():
                _visit(v, k, path + [k], visit, leaves_only)
        elif isinstance(value, str) or not leaves_only:
            visit(value, key, path)

def visit_all(root: Dict[str, Node], visit: Callable[[Node, str, List[str]], Any]):
    """Call visit(value, key, path) for every entry in the tree

    Attribute buckets and their entries are included.  List entries are
    visited one by one, with the key of the list.
    """
    for key, value in root.items():
        _visit(value, key, [key], visit, leaves_only=False)

def visit_leaves(root: Dict[str, Node], visit: Callable[[str, str, List[str]], Any]):
    """Call visit(value, key, path) for every string leaf of the tree

    Attribute buckets are skipped, so only document text is seen.  Text
    inside a list is visited with the key of the list.
    """
    for key, value in root.items():
        if key == ATTR_KEY:
            continue
        _visit(value, key, [key], visit, leaves_only=True)


def get_path(root, path, default=None):
    "Get the value at a dotted path, or default if any step of the way is missing"
    node = root
    for key in path.split('.'):
        if not isinstance(node, dict) or key not in node:
            return default
        node = node[key]
    return node

def has_path(root, path):
    marker = object()
    return get_path(root, path, marker) is not marker

def as_list(value):
    "A node which may hold a single child element or a list of them, as a list"
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [ value ]

def node_text(value):
    "The direct text of an element node, whether a plain string or mixed content"
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        text = value.get(TEXT_KEY, '')
        return text if isinstance(text, str) else ' '.join(as_list(text))
    return ''

def path_segment_name(segment):
    "Strip any '[index]' suffix from a path segment"
    return segment.split('[', 1)[0]
