# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-
#
# Settings for idnits.  Plain module-level constants, in the manner of the
# datatracker's ietf/settings.py; nothing here is computed at run time.

import os

# Logging levels for the loggers set up in idnits.log
UTILS_LOGGER_LEVELS = {
    'idnits': os.environ.get('IDNITS_LOG_LEVEL', 'WARNING'),
}

DEFAULT_REQUESTS_TIMEOUT = 20  # seconds

REQUESTS_USER_AGENT = 'idnits'

# Remote registries
IANA_ROOT_ZONE_DB_URL = 'https://www.iana.org/domains/root/db'
IANA_ARPA_ZONE_DB_URL = 'https://www.iana.org/domains/arpa'
DATATRACKER_DOC_INFO_URL = 'https://datatracker.ietf.org/api/v1/doc/document/{name}/'
RFC_EDITOR_RFC_INFO_URL = 'https://www.rfc-editor.org/rfc/rfc{number}.json'

# Special-use TLDs (RFC 2606, RFC 6761) which never appear in the root zone
RESERVED_TLDS = [ '.test', '.example', '.invalid', '.localhost', ]

# Domains that external entities may be fetched from
ALLOWED_DOMAINS_DEFAULT = [
    'bib.ietf.org',
    'datatracker.ietf.org',
    'www.rfc-editor.org',
    'xml2rfc.ietf.org',
    'xml2rfc.tools.ietf.org',
]

# Document limits
FILENAME_MAX_LENGTH = 50
LINE_LENGTH_LIMIT = 72
MAX_AUTHORS = 5
DATE_TOLERANCE_DAYS = 3
