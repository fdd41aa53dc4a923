# Copyright The IETF Trust 2018-2026, All Rights Reserved
# -*- coding: utf-8 -*-

import argparse
import io
import json
import logging
import os
import re
import sys

from importlib import metadata

import idnits

from idnits.checker import Checker
from idnits.diagnostics import Severity, diagnostic_as_dict
from idnits.log import logger
from idnits.modes import get_mode_by_name
from idnits.utils import plural, wrap

# ----------------------------------------------------------------------

filter_severities = dict(errors=Severity.ERROR, warnings=Severity.WARNING, comments=Severity.COMMENT)

def show_version(verbose=False):
    # Show version information, then exit
    print('%s %s' % (idnits.NAME, idnits.__version__))
    if verbose:
        try:
            requires = metadata.requires(idnits.NAME) or []
        except metadata.PackageNotFoundError:
            requires = []
        for req in requires:
            name = re.split(r'[\s<>=!~;\[]', req.strip(), maxsplit=1)[0]
            try:
                print('  %s %s' % (name, metadata.version(name)))
            except metadata.PackageNotFoundError:
                pass

def die(*args):
    sys.stderr.write('Error: ' + ' '.join(args))
    sys.stderr.write('\n')
    sys.exit(1)

def location(filename, d):
    "Yield the position strings of a diagnostic"
    if d.lines:
        for l in d.lines:
            yield "%s(%s:%s)" % (filename, l.line, l.pos)
    elif d.path:
        yield "%s: %s" % (filename, d.path)

def write_pretty(out, filename, items, options):
    severities = list(Severity.ALL)
    for s in severities:
        found = [ d for d in items if d.severity == s ]
        if found:
            count, plur = plural(found)
            out.write("\n%s%s:\n\n" % (Severity.longform[s].capitalize(), plur))
            for d in found:
                out.write(wrap("   %s [%s]" % (d.message, d.code), i=6))
                out.write('\n')
                if options.verbose:
                    for where in location(filename, d):
                        out.write("      %s\n" % where)
                    if d.ref:
                        out.write("      See %s\n" % d.ref)
    summary = []
    for s in severities:
        count, plur = plural([ d for d in items if d.severity == s ])
        summary.append("%s %s%s" % (count, Severity.longform[s], plur))
    out.write("\nFound %s.\n\n" % ', '.join(summary))

def write_count(out, filename, items, options):
    counts = [ len([ d for d in items if d.severity == s ]) for s in Severity.ALL ]
    out.write("%s: %s\n" % (filename, ' '.join( '%s=%d' % (Severity.longform[s], c) for s, c in zip(Severity.ALL, counts) )))

def main():
    # Populate options
    argparser = argparse.ArgumentParser(description=idnits.DESCRIPTION.split('\n')[0])
    argparser.add_argument('docs', metavar='DOC', nargs='*', help="document to check")

    argparser.add_argument('-d', '--debug', action='store_true', help="show debug information")
    argparser.add_argument('-f', '--filter', action='append', choices=list(filter_severities.keys()), default=[],
        help="only show diagnostics of the given severity; may be given more than once")
    argparser.add_argument('-m', '--mode', default='normal',
        help="the mode to run in: normal, forgive-checklist or submission, default=%(default)s")
    argparser.add_argument('--offline', action='store_true', help="don't do any checks which need network access")
    argparser.add_argument('-o', '--output', choices=['pretty', 'json', 'count', ], default='pretty',
        help="output format, default=%(default)s")
    argparser.add_argument('-v', '--verbose', action='store_true', help="be more verbose")
    argparser.add_argument('-V', '--version', action='store_true', help="show version information, then exit")

    options = argparser.parse_args()
    for o in vars(options):
        assert hasattr(idnits.default_options, o), "Internal error: Missing a default option value for '%s'"%o

    if options.version:
        show_version(verbose=options.verbose)
        sys.exit(0)

    if options.debug:
        logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            handler.setLevel(logging.DEBUG)

    try:
        mode = get_mode_by_name(options.mode)
    except ValueError as e:
        die(str(e))

    shown = [ filter_severities[f] for f in options.filter ] or list(Severity.ALL)
    errors = 0
    results = {}
    progress = (lambda msg: sys.stderr.write('  %s\n' % msg)) if options.verbose and options.output == 'pretty' else None
    with Checker(mode=mode, offline=options.offline, progress_report=progress) as checker:
        for path in options.docs:
            filename = os.path.basename(path)
            try:
                with io.open(path, 'rb') as file:
                    raw = file.read()
            except IOError as e:
                die('Could not read %s:' % path, str(e))
            if options.output == 'pretty':
                sys.stdout.write("Inspecting file %s\n" % path)
            items = checker.check(raw, filename)
            errors += len([ d for d in items if d.severity == Severity.ERROR ])
            items = [ d for d in items if d.severity in shown ]
            if options.output == 'pretty':
                write_pretty(sys.stdout, filename, items, options)
            elif options.output == 'count':
                write_count(sys.stdout, filename, items, options)
            else:
                results[path] = [ diagnostic_as_dict(d) for d in items ]

    if options.output == 'json':
        json.dump(results, sys.stdout, indent=2)
        sys.stdout.write('\n')

    sys.exit(1 if errors else 0)

if __name__ == '__main__':
    main()
