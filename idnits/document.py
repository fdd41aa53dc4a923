# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

from collections import namedtuple

from idnits.traversal import get_path


ExternalEntity = namedtuple('ExternalEntity', ['original', 'name', 'type', 'url', ])


class Document(object):
    """Base class for parsed documents

    Built once per run by one of the parsers in idnits.parsers, and only
    read after that.
    """
    DOC_KIND_DRAFT = 'draft'
    DOC_KIND_RFC = 'rfc'

    CERTAINTY_STRICT = 'strict'
    CERTAINTY_GUESS = 'guess'

    type = None                         # 'txt' or 'xml'

    def __init__(self, filename, raw_body):
        self.filename = filename
        self.raw_body = raw_body
        self.doc_kind = None
        self.doc_kind_certainty = None

    @property
    def basename(self):
        "The filename without extension"
        return self.filename.split('.')[0]

    @property
    def lines(self):
        return [ l.rstrip('\r') for l in self.raw_body.split('\n') ]

    def get_docname(self):
        raise NotImplementedError

    def __repr__(self):
        return '<%s %s>' % (self.__class__.__name__, self.filename)


class TxtHeader(object):
    def __init__(self):
        self.authors = []               # list of dict(name=..., org=...)
        self.date = None
        self.source = None
        self.expires = None
        self.intended_status = None
        self.category = None
        self.obsoletes = None
        self.updates = None
        self.issn = None
        self.rfc_number = None


class TxtDocument(Document):
    type = 'txt'

    def __init__(self, filename, raw_body):
        super().__init__(filename, raw_body)
        self.page_count = 1
        self.header = TxtHeader()
        self.title = None
        self.slug = None
        self.markers = {}               # 'header', 'title', 'slug' -> line indices

    def get_docname(self):
        return self.slug


class XmlDocument(Document):
    type = 'xml'

    def __init__(self, filename, raw_body, data, external_entities=None):
        super().__init__(filename, raw_body)
        self.data = data
        self.external_entities = external_entities or []
        self.version = None
        self.version_certainty = None

    def get_docname(self):
        return get_path(self.data, 'rfc._attr.docName')
