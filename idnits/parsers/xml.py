# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
"""
RFC-XML parser.

The document is parsed with lxml and then turned into the generic tree the
rules work on: each element becomes a dict of its child elements, with the
attributes grouped under '_attr' and any text mixed in between children
under '#text'.  Repeated children become lists, elements holding only text
become plain strings, and empty elements become ''.
"""

import re

from lxml import etree

from idnits.diagnostics import LinePos, ParseError
from idnits.document import Document, ExternalEntity, XmlDocument
from idnits.log import log
from idnits.traversal import ATTR_KEY, TEXT_KEY, as_list, get_path


external_entity_re = re.compile(r'<!ENTITY\s+([a-zA-Z0-9-._]+)\s+(SYSTEM|PUBLIC)\s+"(.*)">')
entity_decl_re = re.compile(r'<!ENTITY\s+([^\s%]+)\s')
entity_ref_re = re.compile(r'&([A-Za-z_:][\w.:-]*);')

predefined_entities = [ 'amp', 'lt', 'gt', 'quot', 'apos', ]

XML_NS = 'http://www.w3.org/XML/1998/namespace'


def extract_external_entities(text):
    """Remove external entity declarations from the text

    Returns the cleaned text and a list of ExternalEntity records, in
    document order.  References to the removed entities are escaped, so that
    they remain in the text as literal '&name;' instead of failing the parse.
    """
    entities = []
    def record(match):
        entities.append(ExternalEntity(match.group(0), *match.groups()))
        return ''
    text = external_entity_re.sub(record, text)
    if entities:
        names = '|'.join( re.escape(e.name) for e in entities )
        text = re.sub(r'&(%s);' % names, r'&amp;\1;', text)
    return text, entities

def escape_undefined_entities(text):
    """Escape references to entities the document itself doesn't declare

    Entities which only an external DTD defines, such as the &nbsp; of
    rfc2629.dtd, can't be resolved without fetching the DTD.  They stay in
    the text as literal '&name;'.
    """
    defined = set(predefined_entities) | set(entity_decl_re.findall(text))
    def escape(match):
        if match.group(1) in defined:
            return match.group(0)
        return '&amp;%s;' % match.group(1)
    return entity_ref_re.sub(escape, text)

def qualified_name(elem, name):
    "Render a '{namespace}local' lxml name using the document's own prefix"
    if not name.startswith('{'):
        return name
    qname = etree.QName(name)
    if qname.namespace == XML_NS:
        prefix = 'xml'
    else:
        prefix = None
        for p, ns in elem.nsmap.items():
            if ns == qname.namespace and p:
                prefix = p
                break
    return '%s:%s' % (prefix, qname.localname) if prefix else qname.localname

def element_to_node(elem):
    "Convert an lxml element into a tree node"
    attrs = dict( (qualified_name(elem, k), v) for k, v in elem.attrib.items() )
    texts = []
    if elem.text and elem.text.strip():
        texts.append(elem.text.strip())
    children = []
    for child in elem:
        # comments and processing instructions have a non-string tag
        if isinstance(child.tag, str):
            children.append(child)
        if child.tail and child.tail.strip():
            texts.append(child.tail.strip())
    if not attrs and not children:
        return ' '.join(texts)
    node = {}
    if attrs:
        node[ATTR_KEY] = attrs
    if texts:
        node[TEXT_KEY] = ' '.join(texts)
    repeated = set()
    for child in children:
        name = qualified_name(child, child.tag)
        value = element_to_node(child)
        if name not in node:
            node[name] = value
        elif name in repeated:
            node[name].append(value)
        else:
            node[name] = [ node[name], value ]
            repeated.add(name)
    return node

def tree_from_text(text):
    parser = etree.XMLParser(encoding='utf-8', resolve_entities=True, load_dtd=False, no_network=True,
                             remove_comments=True, remove_pis=True, huge_tree=True)
    root = etree.fromstring(text.encode('utf-8'), parser)
    return { qualified_name(root, root.tag): element_to_node(root) }


def infer_version(data):
    """Returns (version, certainty)

    An explicit version attribute wins; otherwise a front-matter seriesInfo
    with a value implies v3, and anything else is guessed to be v2.
    """
    version = get_path(data, 'rfc._attr.version')
    if version:
        try:
            # "3.0" is taken to mean 3
            version = int(float(version.strip()))
        except (ValueError, OverflowError):
            version = 0
        certainty = Document.CERTAINTY_STRICT
    else:
        if any( get_path(s, '_attr.value') for s in as_list(get_path(data, 'rfc.front.seriesInfo')) ):
            version = 3
        else:
            version = 2
        certainty = Document.CERTAINTY_GUESS
    if version not in (2, 3):
        raise ParseError('XML_UNSUPPORTED_VERSION', 'The schema version of this document is unsupported.',
                         path='rfc.version')
    return version, certainty

def infer_doc_kind(data, filename):
    "Returns (doc_kind, certainty)"
    names = [ get_path(s, '_attr.name') for s in as_list(get_path(data, 'rfc.front.seriesInfo')) ]
    names = [ n for n in names if n ]
    if 'Internet-Draft' in names:
        return Document.DOC_KIND_DRAFT, Document.CERTAINTY_STRICT
    if 'RFC' in names:
        return Document.DOC_KIND_RFC, Document.CERTAINTY_STRICT
    if names:
        raise ParseError('XML_UNSUPPORTED_DOC_KIND', 'The document is neither an Internet Draft or RFC.',
                         path='rfc.front.seriesInfo.name')
    if filename.startswith('draft-'):
        return Document.DOC_KIND_DRAFT, Document.CERTAINTY_GUESS
    if filename.startswith('rfc-'):
        return Document.DOC_KIND_RFC, Document.CERTAINTY_GUESS
    raise ParseError('XML_UNRECOGNIZED_DOC_KIND',
                     'Unable to determine whether the document is an Internet Draft or RFC.  Use the <seriesInfo> '
                     'tag or a proper prefix (draft-, rfc-) in your filename.')


def parse(text, filename):
    """Parse an RFC-XML document

    Raises ParseError if the document isn't well-formed, or its version or
    kind is unsupported or can't be determined.
    """
    cleaned, entities = extract_external_entities(text)
    cleaned = escape_undefined_entities(cleaned)
    try:
        data = tree_from_text(cleaned)
    except etree.XMLSyntaxError as e:
        log("Could not parse %s: %s" % (filename, e))
        raise ParseError('XML_PARSING_FAILED', str(e), lines=[LinePos(e.lineno or 0, 0)]) from e

    doc = XmlDocument(filename, text, data, entities)
    doc.version, doc.version_certainty = infer_version(data)
    doc.doc_kind, doc.doc_kind_certainty = infer_doc_kind(data, filename)
    return doc
